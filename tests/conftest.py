# tests/conftest.py
from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from pkg_authgate.adapters.signing.es256_engine import ES256TokenEngine
from pkg_authgate.adapters.keys.local import InMemoryKeyProvider
from pkg_authgate.adapters.time.clock import FixedClock
from pkg_authgate.config.settings import GatewaySettings
from pkg_authgate.integrations.common.auth_factory import create_gateway

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_pem_pair(curve: ec.EllipticCurve | None = None) -> tuple[bytes, bytes]:
    private_key = ec.generate_private_key(curve or ec.SECP256R1())
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


@pytest.fixture(scope="session")
def key_pair() -> tuple[bytes, bytes]:
    return make_pem_pair()


@pytest.fixture(scope="session")
def other_key_pair() -> tuple[bytes, bytes]:
    return make_pem_pair()


@pytest.fixture
def private_provider(key_pair):
    return InMemoryKeyProvider(key_pair[0])


@pytest.fixture
def public_provider(key_pair):
    return InMemoryKeyProvider(key_pair[1])


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def engine():
    return ES256TokenEngine()


@pytest.fixture
def key_files(tmp_path, key_pair):
    private_path = tmp_path / "private.pem"
    public_path = tmp_path / "public.pem"
    private_path.write_bytes(key_pair[0])
    public_path.write_bytes(key_pair[1])
    return private_path, public_path


@pytest.fixture
def settings(key_files):
    private_path, public_path = key_files
    return GatewaySettings(
        private_key_path=str(private_path),
        public_key_path=str(public_path),
        auth_username="alice",
        auth_password="secret",
        token_validity_minutes=60,
    )


@pytest.fixture
def gateway(settings, clock):
    return create_gateway(settings, clock=clock)
