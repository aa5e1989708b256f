import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Mapping

from .exceptions import MalformedTokenError
from .value_objects import Subject, ValidityPeriod


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Identity and expiry payload signed inside a token.

    Serialized with the registered JWT names: `sub`, `jti`, `exp`.
    A new Claims is built for every issued token; it is never mutated.
    """
    subject: str
    token_id: str
    expires_at: int

    @classmethod
    def new(
            cls,
            subject: str,
            validity: ValidityPeriod | timedelta,
            now: datetime,
    ) -> "Claims":
        """
        Build claims for a token issued at `now`.

        `now` comes from a Clock; this never reads the system time.
        """
        if not isinstance(validity, ValidityPeriod):
            validity = ValidityPeriod(validity)

        expiration = now + validity.duration
        return cls(
            subject=str(Subject(subject)),
            token_id=str(uuid.uuid4()),
            expires_at=int(expiration.timestamp()),
        )

    # ---- serialization ---------------------------------------------------

    def to_payload(self) -> Dict[str, Any]:
        return {"sub": self.subject, "jti": self.token_id, "exp": self.expires_at}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Claims":
        """
        Rebuild claims from a decoded token payload.

        Raises:
            MalformedTokenError if a claim is missing or has the wrong type.
        """
        if not isinstance(payload, Mapping):
            raise MalformedTokenError("Token payload must be a JSON object")

        sub = payload.get("sub")
        jti = payload.get("jti")
        exp = payload.get("exp")

        if not isinstance(sub, str) or not sub:
            raise MalformedTokenError("Token payload has no valid 'sub' claim")
        if not isinstance(jti, str) or not jti:
            raise MalformedTokenError("Token payload has no valid 'jti' claim")
        # bool is an int subclass, but never a timestamp
        if isinstance(exp, bool) or not isinstance(exp, int):
            raise MalformedTokenError("Token payload has no valid 'exp' claim")

        return cls(subject=sub, token_id=jti, expires_at=exp)

    # ---- expiry ----------------------------------------------------------

    def is_expired(self, now: datetime) -> bool:
        return now.timestamp() >= self.expires_at
