from __future__ import annotations

import logging
import os
import threading
from typing import Optional, Union

from ...domain.exceptions import KeyLoadError
from ...domain.ports import PrivateKeyProvider, PublicKeyProvider

logger = logging.getLogger(__name__)


class LocalFileKeyProvider(PrivateKeyProvider, PublicKeyProvider):
    """
    Adapter reading PEM key bytes from a local file.

    Serves either role; use one instance per key file. With `cache=True` the
    file is read once and the bytes are kept for the life of the provider.
    """

    def __init__(self, key_path: Union[str, os.PathLike], cache: bool = False) -> None:
        self._key_path = os.fspath(key_path)
        self._cache = cache

        self._cached: Optional[bytes] = None
        self._lock = threading.Lock()

    @property
    def key_path(self) -> str:
        return self._key_path

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def load(self) -> bytes:
        """
        Raises:
            KeyLoadError
        """
        if not self._cache:
            return self._read()

        # lock-free fast path once populated
        cached = self._cached
        if cached is not None:
            return cached

        with self._lock:
            if self._cached is None:
                self._cached = self._read()
            return self._cached

    def invalidate(self) -> None:
        """Drop the cached bytes so the next load re-reads the file."""
        with self._lock:
            self._cached = None

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _read(self) -> bytes:
        try:
            with open(self._key_path, "rb") as fh:
                data = fh.read()
        except OSError as exc:
            raise KeyLoadError(f"Cannot read key file {self._key_path!r}: {exc}", cause=exc) from exc

        if not data:
            raise KeyLoadError(f"Key file {self._key_path!r} is empty")

        logger.debug("Loaded %d key bytes from %s", len(data), self._key_path)
        return data


class InMemoryKeyProvider(PrivateKeyProvider, PublicKeyProvider):
    """Adapter holding key bytes in memory (tests, embedding)."""

    def __init__(self, key: Union[bytes, str]) -> None:
        self._key = key.encode("utf-8") if isinstance(key, str) else bytes(key)

    def load(self) -> bytes:
        if not self._key:
            raise KeyLoadError("In-memory key is empty")
        return self._key
