from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...adapters.signing.es256_engine import ES256TokenEngine
from ...adapters.keys.local import LocalFileKeyProvider
from ...adapters.time.clock import SystemClock
from ...application.use_cases.login import LoginUseCase
from ...application.use_cases.verify import VerifyTokenUseCase
from ...config.settings import GatewaySettings
from ...domain.entities import Claims
from ...domain.ports import Clock, PrivateKeyProvider, PublicKeyProvider, TokenEngine
from ...domain.value_objects import ValidityPeriod


@dataclass(slots=True)
class AuthGateway:
    """
    Framework-agnostic gateway facade.

    Integrations (FastAPI, CLI) adapt this to their own request / response
    handling.
    """

    login_use_case: LoginUseCase
    verify_use_case: VerifyTokenUseCase

    # --- Core operations --------------------------------------------------

    def login(self, username: str, password: str) -> str:
        """Credentials -> token (or raise auth exceptions)."""
        return self.login_use_case.execute(username, password)

    def verify(self, token: str) -> Claims:
        """Token -> Claims (or raise auth exceptions)."""
        return self.verify_use_case.execute(token)

    def issue(self, subject: str, validity: Optional[ValidityPeriod] = None) -> str:
        """Subject -> token, skipping the password check (operator tooling)."""
        return self.login_use_case.issue(subject, validity)


def create_gateway(
        settings: GatewaySettings,
        *,
        clock: Optional[Clock] = None,
        token_engine: Optional[TokenEngine] = None,
        private_key_provider: Optional[PrivateKeyProvider] = None,
        public_key_provider: Optional[PublicKeyProvider] = None,
) -> AuthGateway:
    """
    High-level factory: GatewaySettings -> AuthGateway.

    - builds file-backed key providers from the configured paths
    - wires LoginUseCase + VerifyTokenUseCase around one ES256TokenEngine
    - returns an AuthGateway facade.

    Any collaborator can be passed in instead (e.g. an HttpKeyProvider or a
    FixedClock in tests).
    """
    clock = clock or SystemClock()
    engine = token_engine or ES256TokenEngine()

    private_provider = private_key_provider or LocalFileKeyProvider(
        settings.private_key_path,
        cache=settings.cache_keys,
    )
    public_provider = public_key_provider or LocalFileKeyProvider(
        settings.public_key_path,
        cache=settings.cache_keys,
    )

    login_uc = LoginUseCase(
        token_engine=engine,
        private_key_provider=private_provider,
        clock=clock,
        validity=settings.validity_period,
        reference_username=settings.auth_username,
        reference_password=settings.auth_password,
    )
    verify_uc = VerifyTokenUseCase(
        token_engine=engine,
        public_key_provider=public_provider,
        clock=clock,
    )

    return AuthGateway(
        login_use_case=login_uc,
        verify_use_case=verify_uc,
    )
