from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..common.auth_factory import AuthGateway, create_gateway
from ...config.settings import GatewaySettings
from ...domain.entities import Claims
from ...domain.exceptions import (
    InternalAuthError,
    InvalidCredentialsError,
    InvalidRequestError,
    InvalidTokenError,
    TokenExpiredError,
)

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------- #
# Request / response bodies
# --------------------------------------------------------------------- #

class LoginPayload(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str


class VerifyPayload(BaseModel):
    token: str


class ClaimsBody(BaseModel):
    sub: str
    jti: str
    exp: int

    @classmethod
    def from_claims(cls, claims: Claims) -> "ClaimsBody":
        return cls(**claims.to_payload())


class VerifyResponse(BaseModel):
    status: str
    token: ClaimsBody


class ErrorMessage(BaseModel):
    details: str


# --------------------------------------------------------------------- #
# Routes
# --------------------------------------------------------------------- #

def create_router(gateway: AuthGateway) -> APIRouter:
    """
    Build the `/login` and `/verify` routes around an AuthGateway.

    Handlers are sync so key loading runs in the threadpool.
    """
    router = APIRouter()

    @router.post("/login", response_model=LoginResponse)
    def login(payload: LoginPayload) -> LoginResponse:
        return LoginResponse(token=gateway.login(payload.username, payload.password))

    @router.post("/verify", response_model=VerifyResponse)
    def verify(payload: VerifyPayload) -> VerifyResponse:
        claims = gateway.verify(payload.token)
        return VerifyResponse(status="ok", token=ClaimsBody.from_claims(claims))

    return router


# --------------------------------------------------------------------- #
# Error mapping
# --------------------------------------------------------------------- #

# (status, fixed message or None to use the exception text)
_ERROR_RESPONSES: dict[type[Exception], tuple[int, Optional[str]]] = {
    InvalidRequestError: (status.HTTP_400_BAD_REQUEST, None),
    InvalidCredentialsError: (status.HTTP_401_UNAUTHORIZED, "Invalid credentials"),
    InvalidTokenError: (status.HTTP_400_BAD_REQUEST, "Problem with token"),
    TokenExpiredError: (status.HTTP_401_UNAUTHORIZED, "Token expired"),
    InternalAuthError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong"),
}


def _error(status_code: int, details: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorMessage(details=details).model_dump())


def install_error_handlers(app: FastAPI) -> None:
    """Translate domain errors and framework errors into `{"details": ...}` bodies."""

    def _make_handler(status_code: int, message: Optional[str]):
        async def _handler(request: Request, exc: Exception) -> JSONResponse:
            return _error(status_code, message or str(exc))

        return _handler

    for exc_type, (status_code, message) in _ERROR_RESPONSES.items():
        app.add_exception_handler(exc_type, _make_handler(status_code, message))

    async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Invalid request body on %s: %s", request.url.path, exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON format or missing fields")

    async def _http_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error(exc.status_code, "Path does not exist")
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    app.add_exception_handler(RequestValidationError, _validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_handler)


# --------------------------------------------------------------------- #
# Application
# --------------------------------------------------------------------- #

def create_app(
    settings: Optional[GatewaySettings] = None,
    *,
    gateway: Optional[AuthGateway] = None,
) -> FastAPI:
    """
    High-level helper: settings (or a ready gateway) -> FastAPI app.

        app = create_app(settings_from_env())
    """
    if gateway is None:
        if settings is None:
            raise ValueError("create_app needs either settings or a gateway")
        gateway = create_gateway(settings)

    app = FastAPI(title="pkg-authgate")
    app.state.gateway = gateway
    app.include_router(create_router(gateway))
    install_error_handlers(app)
    return app
