"""
Destinations for the arguments of a successful RPC response.

A caller picks one of three sinks when issuing an exchange:

    DiscardSink()              -- fire-and-forget, nothing is decoded
    StringSink(writer)         -- arguments must be a JSON string
    TypedSink(TorrentGetResponse) -- structural decode into a type

Sinks are only fed once the whole exchange has succeeded, so a sink's value
stays untouched when an error is raised.
"""

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import IO, Any, Generic, Optional, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from .errors import DecodeError


T = TypeVar("T")

# Marks a response that carried no "arguments" member
MISSING = object()


class Sink(ABC):
    @abstractmethod
    def consume(self, method: str, arguments: Any) -> Any:
        """Decode the response arguments and return the result."""
        pass


@dataclass
class DiscardSink(Sink):
    def consume(self, method: str, arguments: Any) -> None:
        return None


@dataclass
class StringSink(Sink):
    """Passes a string-valued arguments payload through, optionally to a stream."""
    writer: Optional[Union[IO[str], IO[bytes]]] = None
    value: Optional[str] = field(default=None, init=False)

    def consume(self, method: str, arguments: Any) -> str:
        if arguments is MISSING:
            raise DecodeError("response has no arguments", method=method)
        if not isinstance(arguments, str):
            raise DecodeError(
                f"expected a JSON string, got {type(arguments).__name__}",
                method=method,
            )

        if self.writer is not None:
            if isinstance(self.writer, (io.RawIOBase, io.BufferedIOBase)):
                self.writer.write(arguments.encode("utf-8"))
            else:
                self.writer.write(arguments)

        self.value = arguments
        return arguments


class TypedSink(Sink, Generic[T]):
    """Decodes the arguments object into the given type."""

    def __init__(self, shape: Type[T]):
        self.shape = shape
        self.adapter = TypeAdapter(shape)
        self.value: Optional[T] = None

    def __repr__(self):
        return f"TypedSink({getattr(self.shape, '__name__', self.shape)!r})"

    def consume(self, method: str, arguments: Any) -> T:
        if arguments is MISSING or arguments is None:
            arguments = {}

        try:
            value = self.adapter.validate_python(arguments)
        except ValidationError as e:
            error = e.errors()[0]
            location = ".".join(str(part) for part in error["loc"]) or None
            raise DecodeError(error["msg"], method=method, field=location) from e

        self.value = value
        return value


def resolve(destination: Optional[Sink]) -> Sink:
    if destination is None:
        return DiscardSink()
    if not isinstance(destination, Sink):
        raise TypeError(f"Unsupported destination: {destination!r}")
    return destination
