"""
pkg_authgate.config

- GatewaySettings: keys, reference credentials, token lifetime, listen address.
- settings_from_env: build GatewaySettings from environment variables
  (PRIVATE_KEY_PATH, PUBLIC_KEY_PATH, AUTH_USERNAME, AUTH_PASSWORD,
  TOKEN_VALIDITY_MINUTES, CACHE_KEYS, SERVER_ADDRESS, LOG_LEVEL).
- load_env_file: read a `.env` file into the environment first.
"""

from __future__ import annotations

from .env import load_env_file, settings_from_env
from .settings import GatewaySettings

__all__ = [
    "GatewaySettings",
    "load_env_file",
    "settings_from_env",
]
