import binascii
import json
import logging
import re
from typing import Any, Dict

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.ec import (
    SECP256R1,
    EllipticCurvePrivateKey,
)
from jwt.algorithms import ECAlgorithm
from jwt.api_jws import PyJWS
from jwt.exceptions import (
    DecodeError,
    InvalidAlgorithmError,
    InvalidKeyError,
    PyJWTError,
)
from jwt.utils import base64url_decode, base64url_encode

from ...domain.constants import ALGORITHM, TOKEN_TYPE
from ...domain.entities import Claims
from ...domain.exceptions import (
    InvalidSignatureError,
    KeyLoadError,
    MalformedTokenError,
    TokenExpiredError,
    TokenIssueError,
)
from ...domain.ports import Clock, PrivateKeyProvider, PublicKeyProvider, TokenEngine
from ...domain.value_objects import ValidityPeriod

logger = logging.getLogger(__name__)

# base64url alphabet, unpadded
_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]+")

# Only the signature is checked by PyJWS; payload and expiry are handled here.
_JWS_OPTIONS: Dict[str, Any] = {"verify_signature": True}


class ES256TokenEngine(TokenEngine):
    """
    Adapter implementing TokenEngine port using PyJWT with ES256 keys.

    Infrastructure layer:
    - Knows about JWT structure, signing and verification.
    - Knows nothing about where keys come from or what time it is; both are
      passed in with each call.
    """

    def __init__(self) -> None:
        self._algorithm = ECAlgorithm(ECAlgorithm.SHA256)
        self._jws = PyJWS()

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def issue(
        self,
        private_key_provider: PrivateKeyProvider,
        subject: str,
        validity: ValidityPeriod,
        clock: Clock,
    ) -> str:
        """
        Build claims for `subject` and sign them.

        Returns:
            Compact JWT string `header.payload.signature`.

        Raises:
            TokenIssueError
        """
        try:
            key = self._prepare_key(private_key_provider.load(), private=True)
        except KeyLoadError as exc:
            raise TokenIssueError("Cannot load signing key", cause=exc) from exc

        claims = Claims.new(subject, validity, clock.now())

        try:
            token = jwt.encode(
                claims.to_payload(),
                key,
                algorithm=ALGORITHM,
                headers={"typ": TOKEN_TYPE},
            )
        except (PyJWTError, ValueError, TypeError) as exc:
            raise TokenIssueError(f"Cannot sign token: {exc}", cause=exc) from exc

        logger.debug("Issued token jti=%s for sub=%s exp=%s", claims.token_id, claims.subject, claims.expires_at)
        return token

    def verify(
        self,
        public_key_provider: PublicKeyProvider,
        token: str,
        clock: Clock,
    ) -> Claims:
        """
        Decode and validate a token.

        Returns:
            The Claims embedded in the token.

        Raises:
            MalformedTokenError
            InvalidSignatureError
            TokenExpiredError
            KeyLoadError
        """
        if not token or not isinstance(token, str):
            raise MalformedTokenError("Token is empty")

        key = self._prepare_key(public_key_provider.load(), private=False)

        self._check_structure(token)

        # header is known good from here on, so any decoding problem in the
        # payload or signature segment means the signed bytes were altered
        _, payload_b64, signature_b64 = token.split(".")
        if not (_is_canonical(payload_b64) and _is_canonical(signature_b64)):
            raise InvalidSignatureError("Invalid token signature: non-canonical segment")

        try:
            decoded = self._jws.decode_complete(
                token,
                key,
                algorithms=[ALGORITHM],
                options=_JWS_OPTIONS,
            )
        except (DecodeError, InvalidAlgorithmError) as exc:
            raise InvalidSignatureError(f"Invalid token signature: {exc}") from exc
        except PyJWTError as exc:
            raise MalformedTokenError(f"Invalid token header: {exc}") from exc

        try:
            payload = json.loads(decoded["payload"])
        except ValueError as exc:
            raise MalformedTokenError(f"Token payload is not JSON: {exc}") from exc

        claims = Claims.from_payload(payload)

        # signature is known good at this point
        if claims.is_expired(clock.now()):
            raise TokenExpiredError("Token has expired")

        return claims

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _check_structure(token: str) -> None:
        segments = token.split(".")
        if len(segments) != 3:
            raise MalformedTokenError(
                f"Token must have 3 segments, got {len(segments)}"
            )

        if not all(_SEGMENT_RE.fullmatch(segment) for segment in segments):
            raise MalformedTokenError("Token segment is not valid base64url")

        try:
            header = json.loads(base64url_decode(segments[0]))
        except (binascii.Error, ValueError) as exc:
            raise MalformedTokenError(f"Token header is not valid JSON: {exc}") from exc
        if not isinstance(header, dict):
            raise MalformedTokenError("Token header must be a JSON object")

    def _prepare_key(self, pem: bytes, *, private: bool):
        """
        Parse PEM bytes into a P-256 key object.

        Raises:
            KeyLoadError
        """
        try:
            key = self._algorithm.prepare_key(pem)
        except (InvalidKeyError, UnsupportedAlgorithm, ValueError, TypeError) as exc:
            raise KeyLoadError(f"Key is not a usable PEM-encoded EC key: {exc}", cause=exc) from exc

        if private and not isinstance(key, EllipticCurvePrivateKey):
            raise KeyLoadError("Signing key must be an EC private key")
        if not isinstance(key.curve, SECP256R1):
            raise KeyLoadError(f"{ALGORITHM} requires a P-256 key, got {key.curve.name}")

        return key


def _is_canonical(segment: str) -> bool:
    """True if `segment` is exactly the unpadded base64url encoding of its bytes."""
    try:
        raw = base64url_decode(segment)
    except (binascii.Error, ValueError):
        return False
    return base64url_encode(raw).decode("ascii") == segment
