"""
torrent-rpc - Client for the Transmission JSON-over-HTTP RPC interface.

Handles the daemon's session id handshake transparently and decodes
responses into typed models or caller-chosen sinks.
"""

from .client import TransmissionClient
from .config import Config
from .errors import DecodeError, RemoteError, SessionNegotiationError, TransmissionError, TransportError
from .models import (
    DEFAULT_FIELDS,
    Status,
    Torrent,
    TorrentAddRequest,
    TorrentAdded,
    TorrentGetRequest,
    TorrentRemoveRequest,
    TorrentSetRequest,
)
from .sinks import DiscardSink, StringSink, TypedSink

__version__ = "0.1.0"
__all__ = [
    "TransmissionClient",
    "Config",
    "TransmissionError",
    "TransportError",
    "SessionNegotiationError",
    "RemoteError",
    "DecodeError",
    "DEFAULT_FIELDS",
    "Status",
    "Torrent",
    "TorrentAdded",
    "TorrentGetRequest",
    "TorrentAddRequest",
    "TorrentSetRequest",
    "TorrentRemoveRequest",
    "DiscardSink",
    "StringSink",
    "TypedSink",
]
