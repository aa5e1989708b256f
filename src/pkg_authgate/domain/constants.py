from enum import Enum

ALGORITHM = "ES256"
TOKEN_TYPE = "JWT"

DEFAULT_VALIDITY_MINUTES = 30


class RejectionReason(Enum):
    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
