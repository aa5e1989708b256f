from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.credentials import check_credentials
from ...domain.exceptions import (
    InternalAuthError,
    InvalidCredentialsError,
    InvalidRequestError,
    TokenIssueError,
)
from ...domain.ports import Clock, PrivateKeyProvider, TokenEngine
from ...domain.value_objects import LoginCredentials, ValidityPeriod

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoginUseCase:
    """
    Application use case:
    - Check a username/password against the configured reference pair
    - Issue a signed token for the username via the TokenEngine port

    The reference pair comes from configuration; there is no user store.
    """

    token_engine: TokenEngine
    private_key_provider: PrivateKeyProvider
    clock: Clock
    validity: ValidityPeriod
    reference_username: str
    reference_password: str = field(repr=False)

    def execute(self, username: str, password: str) -> str:
        """
        Exchange credentials for a token.

        Raises:
            InvalidRequestError
            InvalidCredentialsError
            InternalAuthError
        """
        credentials = LoginCredentials(username=username or "", password=password or "")
        if not credentials.is_complete:
            raise InvalidRequestError("Username or password cannot be empty")

        if not check_credentials(
            credentials.username,
            credentials.password,
            self.reference_username,
            self.reference_password,
        ):
            logger.info("Rejected login for username=%r", credentials.username)
            raise InvalidCredentialsError()

        return self.issue(credentials.username)

    def issue(self, subject: str, validity: Optional[ValidityPeriod] = None) -> str:
        """Sign a token for `subject` without a credential check."""
        try:
            return self.token_engine.issue(
                self.private_key_provider,
                subject,
                self.validity if validity is None else validity,
                self.clock,
            )
        except TokenIssueError as exc:
            # full detail stays in the log; callers only see the generic error
            logger.error("Token issue failed: %s (cause: %r)", exc, exc.cause)
            raise InternalAuthError() from exc
