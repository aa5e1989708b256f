# tests/test_use_cases.py
import logging
from datetime import timedelta

import pytest

from pkg_authgate.adapters.keys.local import InMemoryKeyProvider, LocalFileKeyProvider
from pkg_authgate.application.use_cases.login import LoginUseCase
from pkg_authgate.application.use_cases.verify import VerifyTokenUseCase
from pkg_authgate.domain.exceptions import (
    InternalAuthError,
    InvalidCredentialsError,
    InvalidRequestError,
    InvalidTokenError,
    TokenExpiredError,
)
from pkg_authgate.domain.value_objects import ValidityPeriod

from conftest import T0


@pytest.fixture
def login_uc(engine, private_provider, clock):
    return LoginUseCase(
        token_engine=engine,
        private_key_provider=private_provider,
        clock=clock,
        validity=ValidityPeriod(timedelta(hours=1)),
        reference_username="alice",
        reference_password="secret",
    )


@pytest.fixture
def verify_uc(engine, public_provider, clock):
    return VerifyTokenUseCase(token_engine=engine, public_key_provider=public_provider, clock=clock)


def test_login_then_verify(login_uc, verify_uc):
    token = login_uc.execute("alice", "secret")
    claims = verify_uc.execute(token)

    assert claims.subject == "alice"
    assert claims.expires_at == int((T0 + timedelta(hours=1)).timestamp())


@pytest.mark.parametrize(
    "username,password",
    [("", "secret"), ("alice", ""), ("", ""), (None, "secret")],
)
def test_login_rejects_empty_fields(login_uc, username, password):
    with pytest.raises(InvalidRequestError) as exc_info:
        login_uc.execute(username, password)

    assert str(exc_info.value) == "Username or password cannot be empty"


@pytest.mark.parametrize("username,password", [("alice", "wrong"), ("bob", "secret")])
def test_login_rejects_bad_credentials(login_uc, username, password):
    with pytest.raises(InvalidCredentialsError):
        login_uc.execute(username, password)


def test_login_hides_key_failures(engine, clock, tmp_path, caplog):
    missing = tmp_path / "secret-dir" / "private.pem"
    login_uc = LoginUseCase(
        token_engine=engine,
        private_key_provider=LocalFileKeyProvider(missing),
        clock=clock,
        validity=ValidityPeriod.from_minutes(30),
        reference_username="alice",
        reference_password="secret",
    )

    with caplog.at_level(logging.ERROR):
        with pytest.raises(InternalAuthError) as exc_info:
            login_uc.execute("alice", "secret")

    assert str(exc_info.value) == "Something went wrong"
    assert "secret-dir" not in str(exc_info.value)
    # operators still get the detail
    assert "secret-dir" in caplog.text


def test_verify_rejects_empty_token(verify_uc):
    with pytest.raises(InvalidRequestError) as exc_info:
        verify_uc.execute("")

    assert str(exc_info.value) == "Token cannot be empty"


def test_verify_rejects_garbage(verify_uc):
    with pytest.raises(InvalidTokenError):
        verify_uc.execute("garbage")


def test_verify_expired(login_uc, verify_uc, clock):
    token = login_uc.execute("alice", "secret")
    clock.advance(timedelta(minutes=90))

    with pytest.raises(TokenExpiredError):
        verify_uc.execute(token)


def test_verify_hides_key_failures(login_uc, engine, clock, caplog):
    token = login_uc.execute("alice", "secret")
    verify_uc = VerifyTokenUseCase(
        token_engine=engine,
        public_key_provider=InMemoryKeyProvider(b"broken"),
        clock=clock,
    )

    with caplog.at_level(logging.ERROR):
        with pytest.raises(InternalAuthError):
            verify_uc.execute(token)

    assert "Verification key unavailable" in caplog.text


def test_gateway_facade(gateway, clock):
    token = gateway.login("alice", "secret")

    clock.advance(timedelta(minutes=30))
    assert gateway.verify(token).subject == "alice"

    clock.advance(timedelta(minutes=60))
    with pytest.raises(TokenExpiredError):
        gateway.verify(token)


def test_issue_without_credentials(login_uc, verify_uc):
    token = login_uc.issue("svc-reports", ValidityPeriod.from_minutes(5))
    claims = verify_uc.execute(token)

    assert claims.subject == "svc-reports"
    assert claims.expires_at == int((T0 + timedelta(minutes=5)).timestamp())


def test_gateway_issue_defaults_to_configured_validity(gateway):
    claims = gateway.verify(gateway.issue("bob"))

    assert claims.subject == "bob"
    assert claims.expires_at == int((T0 + timedelta(minutes=60)).timestamp())
