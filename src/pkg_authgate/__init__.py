"""
pkg_authgate

Clean-architecture token gateway: exchanges a username/password pair for
an ES256-signed, time-limited JWT and verifies presented tokens.
The core has no framework dependency; FastAPI is one integration.
"""

__version__ = "0.1.0"

from .domain.entities import Claims
from .domain.constants import ALGORITHM, RejectionReason
from .domain.credentials import check_credentials
from .domain.exceptions import (
    AuthenticationError,
    InvalidRequestError,
    InvalidCredentialsError,
    InvalidTokenError,
    MalformedTokenError,
    InvalidSignatureError,
    TokenExpiredError,
    KeyLoadError,
    TokenIssueError,
    InternalAuthError,
)
from .domain.value_objects import Subject, LoginCredentials, ValidityPeriod
from .domain.ports import Clock, PrivateKeyProvider, PublicKeyProvider, TokenEngine

from .application.use_cases.login import LoginUseCase
from .application.use_cases.verify import VerifyTokenUseCase

from .adapters.signing.es256_engine import ES256TokenEngine
from .adapters.keys.local import LocalFileKeyProvider, InMemoryKeyProvider
from .adapters.keys.remote import HttpKeyProvider
from .adapters.time.clock import SystemClock, FixedClock

from .config import GatewaySettings, settings_from_env
from .integrations.common.auth_factory import AuthGateway, create_gateway

__all__ = [
    "__version__",
    # domain core
    "Claims",
    "ALGORITHM",
    "RejectionReason",
    "check_credentials",
    "Subject",
    "LoginCredentials",
    "ValidityPeriod",
    "Clock",
    "PrivateKeyProvider",
    "PublicKeyProvider",
    "TokenEngine",
    # exceptions
    "AuthenticationError",
    "InvalidRequestError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MalformedTokenError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "KeyLoadError",
    "TokenIssueError",
    "InternalAuthError",
    # use cases
    "LoginUseCase",
    "VerifyTokenUseCase",
    # adapters
    "ES256TokenEngine",
    "LocalFileKeyProvider",
    "InMemoryKeyProvider",
    "HttpKeyProvider",
    "SystemClock",
    "FixedClock",
    # wiring
    "GatewaySettings",
    "settings_from_env",
    "AuthGateway",
    "create_gateway",
]
