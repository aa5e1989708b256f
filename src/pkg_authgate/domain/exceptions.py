from __future__ import annotations

from .constants import RejectionReason


class AuthenticationError(Exception):
    """Raised when a login or verification is rejected for a client-side reason."""
    pass


class InvalidRequestError(AuthenticationError):
    """Raised when a request is structurally invalid or a required field is empty."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when username/password do not match the reference values."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or its signature does not verify."""
    reason: RejectionReason = RejectionReason.MALFORMED


class MalformedTokenError(InvalidTokenError):
    """Raised when token is not a well-formed three-part JWT."""
    reason = RejectionReason.MALFORMED


class InvalidSignatureError(InvalidTokenError):
    """Raised when token signature does not verify under the configured key."""
    reason = RejectionReason.INVALID_SIGNATURE


class TokenExpiredError(AuthenticationError):
    """Raised when token has a valid signature but has expired."""
    reason = RejectionReason.EXPIRED


# --- Internal failures -----------------------------------------------------
#
# Never shown to clients; the use cases log them and raise InternalAuthError.


class KeyLoadError(Exception):
    """Raised when key material cannot be read or parsed."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TokenIssueError(Exception):
    """Raised when a token cannot be built or signed."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InternalAuthError(Exception):
    """Opaque failure surfaced to callers in place of internal errors."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)
