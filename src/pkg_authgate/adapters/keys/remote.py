from __future__ import annotations

import logging
import threading
import time
from typing import Mapping, Optional

import requests
from requests import Session

from ...domain.exceptions import KeyLoadError
from ...domain.ports import PrivateKeyProvider, PublicKeyProvider

logger = logging.getLogger(__name__)


class HttpKeyProvider(PrivateKeyProvider, PublicKeyProvider):
    """
    Adapter fetching PEM key bytes from an HTTP(S) secret endpoint.

    Infrastructure layer:
    - Knows how to GET the raw PEM body from a secret store URL.
    - Keeps the last fetched key for `cache_ttl_seconds` (0 disables caching).
    """

    def __init__(
        self,
        url: str,
        cache_ttl_seconds: int = 300,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = 5.0,
        session: Optional[Session] = None,
    ) -> None:
        self._url = url
        self._cache_ttl = cache_ttl_seconds
        self._headers = dict(headers or {})
        self._timeout = timeout

        self._session = session or Session()
        self._key: Optional[bytes] = None
        self._last_fetched: float = 0.0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def load(self) -> bytes:
        """
        Raises:
            KeyLoadError
        """
        if self._is_fresh(time.monotonic()):
            return self._key  # type: ignore[return-value]

        with self._lock:
            now = time.monotonic()
            if self._is_fresh(now):
                return self._key  # type: ignore[return-value]

            key = self._fetch()
            if self._cache_ttl > 0:
                self._key = key
                self._last_fetched = now
            return key

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _is_fresh(self, now: float) -> bool:
        return self._key is not None and (now - self._last_fetched) < self._cache_ttl

    def _fetch(self) -> bytes:
        try:
            response = self._session.get(self._url, headers=self._headers, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise KeyLoadError(f"Cannot fetch key from {self._url}: {exc}", cause=exc) from exc

        body = response.content
        if not body:
            raise KeyLoadError(f"Key endpoint {self._url} returned an empty body")

        logger.debug("Fetched %d key bytes from %s", len(body), self._url)
        return body
