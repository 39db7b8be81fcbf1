"""
Session id cache shared by all clients in the process.

Transmission guards its RPC endpoint with an X-Transmission-Session-Id header.
The daemon hands out a new id in a 409 response whenever the one we sent is
missing or stale. Ids are kept per endpoint URL so that every client talking
to the same daemon reuses the latest one.

Refreshes are compare-and-set: a client only replaces the id it actually sent.
If another thread already stored a newer id, that one is kept and used for the
retry.
"""

import threading
from typing import Dict


class SessionTokenCache:
    def __init__(self):
        self._tokens: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> str:
        """Return the cached session id for url, or an empty string."""
        with self._lock:
            return self._tokens.get(url, "")

    def set(self, url: str, token: str) -> None:
        with self._lock:
            self._tokens[url] = token

    def refresh(self, url: str, stale: str, fresh: str) -> bool:
        """
        Replace the id for url with fresh if the cached id is still stale.

        Returns:
            True if the cache was updated, False if another caller got there first
        """
        with self._lock:
            if self._tokens.get(url, "") != stale:
                return False
            self._tokens[url] = fresh
            return True

    def forget(self, url: str) -> None:
        with self._lock:
            self._tokens.pop(url, None)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()


session_tokens = SessionTokenCache()
