"""
Transmission RPC client.

Provides the TransmissionClient class for talking to a Transmission daemon over
its JSON-over-HTTP RPC interface. Every call goes through exchange(), which:
- posts a {"method", "arguments"} envelope to the RPC endpoint
- answers the daemon's 409 session challenge by re-sending the same body with
  the X-Transmission-Session-Id it handed out (a bounded number of times)
- checks the "result" member and raises RemoteError unless it is "success"
- hands the "arguments" member to the caller's destination sink

Usage:
    from torrent_rpc import TransmissionClient

    with TransmissionClient("http://localhost:9091/transmission/rpc") as client:
        for torrent in client.get():
            print(torrent.id, torrent.name, torrent.percent_done)
        client.stop(3)
"""

import json
from time import monotonic
from typing import Any, List, Optional, Union

import requests
from pydantic import BaseModel

from .config import Config
from .errors import DecodeError, RemoteError, SessionNegotiationError, TransportError
from .logger import logger
from .models import (
    RPCModel,
    Torrent,
    TorrentActionRequest,
    TorrentAddRequest,
    TorrentAddResponse,
    TorrentAdded,
    TorrentGetRequest,
    TorrentGetResponse,
    TorrentId,
    TorrentRemoveRequest,
    TorrentSetRequest,
)
from .session import SessionTokenCache, session_tokens
from .sinks import MISSING, Sink, TypedSink, resolve


TRANSMISSION_URL = Config.TRANSMISSION_URL
TRANSMISSION_TIMEOUT = Config.TRANSMISSION_TIMEOUT
SESSION_RETRY_LIMIT = Config.SESSION_RETRY_LIMIT

SESSION_HEADER = "X-Transmission-Session-Id"
REQUEST_HEADERS = {
    "Content-Type": "text/json; charset=UTF-8",
    "Accept": "text/json",
}


def encode_envelope(method: str, arguments: Any = None) -> bytes:
    """Serialize a request envelope to the bytes sent on the wire."""
    if arguments is None:
        arguments = {}
    elif isinstance(arguments, RPCModel):
        arguments = arguments.to_arguments()
    elif isinstance(arguments, BaseModel):
        arguments = arguments.model_dump(mode="json", by_alias=True, exclude_none=True)

    body = {"method": method, "arguments": arguments}
    return json.dumps(body).encode("utf-8")


class TransmissionClient:
    def __init__(
        self,
        url: str = TRANSMISSION_URL,
        timeout: Optional[float] = TRANSMISSION_TIMEOUT,
        max_session_retries: int = SESSION_RETRY_LIMIT,
        session: Optional[requests.Session] = None,
        tokens: Optional[SessionTokenCache] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.max_session_retries = max_session_retries
        self.session = session or requests.Session()
        self.tokens = tokens if tokens is not None else session_tokens

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.session.close()

    @property
    def session_id(self) -> str:
        """The session id currently cached for this client's URL."""
        return self.tokens.get(self.url)

    # -------------------------------------------------------------------------
    # Exchange
    # -------------------------------------------------------------------------

    def exchange(
        self,
        method: str,
        arguments: Any = None,
        destination: Optional[Sink] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Perform one complete RPC call.

        Args:
            method: RPC method name, e.g. "torrent-get"
            arguments: dict or request model sent as the "arguments" member
            destination: DiscardSink, StringSink or TypedSink; None discards
            timeout: overall deadline in seconds, defaults to the client timeout;
                checked before each attempt and after each response arrives

        Returns:
            Whatever the destination produced from the response arguments

        Raises:
            TransportError: request failed or unexpected HTTP status
            SessionNegotiationError: session challenge retries exhausted
            RemoteError: the daemon reported a non-success result
            DecodeError: response or arguments had an unexpected shape
        """
        sink = resolve(destination)
        body = encode_envelope(method, arguments)

        response = self._post(method, body, timeout if timeout is not None else self.timeout)
        payload = self._decode_envelope(method, response)

        return sink.consume(method, payload.get("arguments", MISSING))

    def _post(self, method: str, body: bytes, timeout: Optional[float]) -> requests.Response:
        deadline = monotonic() + timeout if timeout is not None else None
        retries = 0

        while True:
            remaining = None
            if deadline is not None:
                remaining = deadline - monotonic()
                if remaining <= 0:
                    raise TransportError(f"Timed out calling {method} at {self.url}")

            session_id = self.tokens.get(self.url)
            headers = dict(REQUEST_HEADERS)
            headers[SESSION_HEADER] = session_id

            try:
                response = self.session.post(self.url, data=body, headers=headers, timeout=remaining)
            except requests.exceptions.Timeout as e:
                raise TransportError(f"Timed out calling {method} at {self.url}: {e}") from e
            except requests.exceptions.RequestException as e:
                raise TransportError(f"Could not reach {self.url}: {e}") from e

            # requests only bounds each connect and read, not the whole body
            if deadline is not None and monotonic() > deadline:
                response.close()
                raise TransportError(f"Timed out calling {method} at {self.url}")

            if response.status_code != 409:
                break

            fresh = response.headers.get(SESSION_HEADER)
            if not fresh:
                raise SessionNegotiationError(
                    f"Server answered 409 without a {SESSION_HEADER} header", attempts=retries + 1
                )
            self.tokens.refresh(self.url, stale=session_id, fresh=fresh)

            if retries >= self.max_session_retries:
                raise SessionNegotiationError(
                    f"Session id still rejected after {retries} retries", attempts=retries + 1
                )
            retries += 1
            logger.debug(f"{method}: session id refreshed, retrying ({retries}/{self.max_session_retries})")

        if not response.ok:
            raise TransportError(
                f"{method} failed with HTTP {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        logger.debug(f"{method}: HTTP {response.status_code} after {retries} session retries")
        return response

    def _decode_envelope(self, method: str, response: requests.Response) -> dict:
        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"response is not valid JSON: {e}", method=method) from e

        if not isinstance(payload, dict):
            raise DecodeError("response is not a JSON object", method=method)

        result = payload.get("result")
        if not isinstance(result, str):
            raise DecodeError("response has no result string", method=method, field="result")
        if result != "success":
            raise RemoteError(result)

        return payload

    # -------------------------------------------------------------------------
    # Torrent Methods
    # -------------------------------------------------------------------------

    def get(self, request: Optional[TorrentGetRequest] = None, timeout: Optional[float] = None) -> List[Torrent]:
        """
        List torrents.

        Args:
            request: optional id filter and field list; all torrents and
                DEFAULT_FIELDS when omitted
        """
        request = request or TorrentGetRequest()
        response = self.exchange("torrent-get", request, TypedSink(TorrentGetResponse), timeout=timeout)
        return response.torrents

    def add(self, request: Union[TorrentAddRequest, str], timeout: Optional[float] = None) -> TorrentAdded:
        """
        Add a torrent from a .torrent path/URL or a magnet URI.

        Returns the daemon's summary of the added torrent, or of the existing
        one when the daemon reports a duplicate.
        """
        if isinstance(request, str):
            request = TorrentAddRequest(filename=request)

        response = self.exchange("torrent-add", request, TypedSink(TorrentAddResponse), timeout=timeout)
        if response.torrent is None:
            raise DecodeError("response has no torrent-added entry", method="torrent-add", field="torrent-added")
        return response.torrent

    def start(self, *ids: TorrentId, timeout: Optional[float] = None) -> None:
        """Start torrents, honouring the daemon's queue."""
        self.exchange("torrent-start", TorrentActionRequest(ids=list(ids)), timeout=timeout)

    def start_now(self, *ids: TorrentId, timeout: Optional[float] = None) -> None:
        """Start torrents immediately, bypassing the queue."""
        self.exchange("torrent-start-now", TorrentActionRequest(ids=list(ids)), timeout=timeout)

    def stop(self, *ids: TorrentId, destination: Optional[Sink] = None, timeout: Optional[float] = None) -> Any:
        """Stop torrents. Pass a StringSink as destination to capture a raw reply."""
        return self.exchange("torrent-stop", TorrentActionRequest(ids=list(ids)), destination, timeout=timeout)

    def set(self, request: TorrentSetRequest, destination: Optional[Sink] = None,
            timeout: Optional[float] = None) -> Any:
        """Change which files of the given torrents are downloaded."""
        return self.exchange("torrent-set", request, destination, timeout=timeout)

    def remove(self, request: TorrentRemoveRequest, timeout: Optional[float] = None) -> None:
        """Remove torrents, optionally deleting their downloaded data."""
        self.exchange("torrent-remove", request, timeout=timeout)
