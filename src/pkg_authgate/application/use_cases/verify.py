from __future__ import annotations

import logging
from dataclasses import dataclass

from ...domain.entities import Claims
from ...domain.exceptions import (
    InternalAuthError,
    InvalidRequestError,
    InvalidTokenError,
    KeyLoadError,
    TokenExpiredError,
)
from ...domain.ports import Clock, PublicKeyProvider, TokenEngine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VerifyTokenUseCase:
    """
    Application use case:
    - Verify a presented token via the TokenEngine port
    - Return its Claims, or a client-facing rejection

    Malformed tokens and bad signatures both surface as InvalidTokenError
    subclasses; the request boundary reports them identically.
    """

    token_engine: TokenEngine
    public_key_provider: PublicKeyProvider
    clock: Clock

    def execute(self, token: str) -> Claims:
        """
        Raises:
            InvalidRequestError
            InvalidTokenError
            TokenExpiredError
            InternalAuthError
        """
        if not token:
            raise InvalidRequestError("Token cannot be empty")

        try:
            return self.token_engine.verify(self.public_key_provider, token, self.clock)
        except (InvalidTokenError, TokenExpiredError) as exc:
            # let callers distinguish these explicitly
            logger.info("Rejected token (%s): %s", exc.reason.value, exc)
            raise
        except KeyLoadError as exc:
            logger.error("Verification key unavailable: %s (cause: %r)", exc, exc.cause)
            raise InternalAuthError() from exc
