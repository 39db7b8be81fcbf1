"""
Exceptions raised by the Transmission RPC client.

Every failure of an exchange surfaces as a subclass of TransmissionError:
- TransportError: the HTTP request could not be completed, or the daemon
  answered with an unexpected HTTP status
- SessionNegotiationError: the daemon kept rejecting the session token
- RemoteError: the daemon processed the call and reported a failure result
- DecodeError: the response did not have the expected shape
"""

from typing import Optional


class TransmissionError(Exception):
    """Base class for all client errors."""
    pass


class TransportError(TransmissionError):
    """Raised when the request fails at the network or HTTP level."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SessionNegotiationError(TransmissionError):
    """Raised when a valid session id could not be obtained from the daemon."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class RemoteError(TransmissionError):
    """Raised when the daemon's result is anything other than "success"."""

    def __init__(self, result: str):
        super().__init__(result)
        self.result = result


class DecodeError(TransmissionError):
    """Raised when a response or its arguments cannot be decoded."""

    def __init__(self, message: str, method: Optional[str] = None, field: Optional[str] = None):
        self.message = message
        self.method = method
        self.field = field
        super().__init__(self._describe())

    def _describe(self) -> str:
        parts = []
        if self.method:
            parts.append(self.method)
        if self.field:
            parts.append(f"field '{self.field}'")
        if parts:
            return f"{': '.join(parts)}: {self.message}"
        return self.message
