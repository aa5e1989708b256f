from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from ..domain.constants import DEFAULT_VALIDITY_MINUTES
from ..domain.value_objects import ValidityPeriod


@dataclass(slots=True)
class GatewaySettings:
    """
    Key locations, reference credentials and token lifetime for the gateway.

    Host code decides how to construct this (env, config file, etc.) and
    builds it once at startup; nothing else reads the environment.
    """
    private_key_path: str
    public_key_path: str
    auth_username: str
    auth_password: str = field(repr=False)
    token_validity_minutes: int = DEFAULT_VALIDITY_MINUTES
    cache_keys: bool = False

    # Process wiring
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.token_validity_minutes <= 0:
            raise ValueError(
                f"token_validity_minutes must be positive, got {self.token_validity_minutes}"
            )

    @property
    def token_validity(self) -> timedelta:
        return timedelta(minutes=self.token_validity_minutes)

    @property
    def validity_period(self) -> ValidityPeriod:
        return ValidityPeriod(self.token_validity)

    @property
    def server_address(self) -> str:
        return f"{self.host}:{self.port}"
