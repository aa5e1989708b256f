from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from ..domain.constants import DEFAULT_VALIDITY_MINUTES
from .settings import GatewaySettings

logger = logging.getLogger(__name__)

DEFAULT_SERVER_ADDRESS = "0.0.0.0:3000"


def load_env_file(path: Optional[str] = None) -> bool:
    """
    Load a `.env` file into the process environment.

    Without `path`, the nearest `.env` from the working directory upwards is
    used. Variables already set in the environment win.
    """
    dotenv_path = path or find_dotenv(usecwd=True)
    if not dotenv_path:
        return False
    loaded = load_dotenv(dotenv_path, override=False)
    if loaded:
        logger.debug("Loaded environment from %s", dotenv_path)
    return loaded


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> GatewaySettings:
    env = os.environ if environ is None else environ

    def _bool(key: str, default: bool = False) -> bool:
        raw = env.get(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _int(key: str, default: int) -> int:
        raw = env.get(key)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(
                "Wrong format of an integer env key: %s. Using default value: %s.",
                key,
                default,
            )
            return default
        if value <= 0:
            logger.warning(
                "Env key %s must be positive, got %s. Using default value: %s.",
                key,
                value,
                default,
            )
            return default
        return value

    private_key_path = env.get("PRIVATE_KEY_PATH")
    public_key_path = env.get("PUBLIC_KEY_PATH")
    auth_username = env.get("AUTH_USERNAME")
    auth_password = env.get("AUTH_PASSWORD")
    if not all([private_key_path, public_key_path, auth_username, auth_password]):
        missing = [
            n
            for n, v in [
                ("PRIVATE_KEY_PATH", private_key_path),
                ("PUBLIC_KEY_PATH", public_key_path),
                ("AUTH_USERNAME", auth_username),
                ("AUTH_PASSWORD", auth_password),
            ]
            if not v
        ]
        raise RuntimeError(f"Missing gateway settings: {', '.join(missing)}")

    host, port = _split_address(env.get("SERVER_ADDRESS") or DEFAULT_SERVER_ADDRESS)

    return GatewaySettings(
        private_key_path=private_key_path,
        public_key_path=public_key_path,
        auth_username=auth_username,
        auth_password=auth_password,
        token_validity_minutes=_int("TOKEN_VALIDITY_MINUTES", DEFAULT_VALIDITY_MINUTES),
        cache_keys=_bool("CACHE_KEYS", False),
        host=host,
        port=port,
        log_level=(env.get("LOG_LEVEL") or "info").strip().lower(),
    )


def _split_address(address: str) -> Tuple[str, int]:
    host, sep, port = address.strip().rpartition(":")
    if not sep or not host:
        raise RuntimeError(f"SERVER_ADDRESS must look like host:port, got {address!r}")
    try:
        return host, int(port)
    except ValueError as exc:
        raise RuntimeError(f"SERVER_ADDRESS has an invalid port: {address!r}") from exc
