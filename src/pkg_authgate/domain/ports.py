from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Claims
from .value_objects import ValidityPeriod


class PrivateKeyProvider(Protocol):
    """
    Port supplying PEM-encoded private key bytes used to sign tokens.

    Implementations live in the adapters layer (local file, in-memory,
    remote secret store).
    """

    def load(self) -> bytes:
        """
        Return the key bytes.

        Raises:
          - KeyLoadError on any I/O or access failure
        """
        ...


class PublicKeyProvider(Protocol):
    """Port supplying PEM-encoded public key bytes used to verify tokens."""

    def load(self) -> bytes:
        ...


class Clock(Protocol):
    """Port supplying the current instant (timezone-aware, UTC)."""

    def now(self) -> datetime:
        ...


class TokenEngine(Protocol):
    """
    Port for issuing and verifying signed tokens.

    Implementations are stateless: keys and time come in with each call.
    """

    def issue(
        self,
        private_key_provider: PrivateKeyProvider,
        subject: str,
        validity: ValidityPeriod,
        clock: Clock,
    ) -> str:
        """
        Raises:
          - TokenIssueError
        """
        ...

    def verify(
        self,
        public_key_provider: PublicKeyProvider,
        token: str,
        clock: Clock,
    ) -> Claims:
        """
        Should:
          - check token structure
          - verify signature
          - check expiry (only after the signature is known to be good)
        Raises:
          - MalformedTokenError
          - InvalidSignatureError
          - TokenExpiredError
          - KeyLoadError
        """
        ...
