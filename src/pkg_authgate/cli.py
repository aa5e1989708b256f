from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .config import load_env_file, settings_from_env
from .domain.exceptions import AuthenticationError, InternalAuthError
from .domain.value_objects import ValidityPeriod
from .integrations.common.auth_factory import create_gateway
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-authgate",
        description="Issue and verify ES256 bearer tokens",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP gateway (POST /login, POST /verify)")
    serve.add_argument("--host", help="Override listen host (default from SERVER_ADDRESS)")
    serve.add_argument("--port", type=int, help="Override listen port (default from SERVER_ADDRESS)")

    issue = sub.add_parser("issue", help="Issue a token for a subject without a password check")
    issue.add_argument("--subject", "-s", required=True, help="Value of the 'sub' claim")
    issue.add_argument(
        "--minutes",
        "-m",
        type=int,
        help="Token validity in minutes (default from TOKEN_VALIDITY_MINUTES)",
    )

    verify = sub.add_parser("verify", help="Verify a token and print its claims")
    verify.add_argument("token", help="Compact JWT to verify")

    return parser.parse_args(args=argv)


def _issue(args: argparse.Namespace) -> dict[str, Any]:
    gateway = create_gateway(settings_from_env())
    validity = None if args.minutes is None else ValidityPeriod.from_minutes(args.minutes)
    return {"token": gateway.issue(args.subject, validity)}


def _verify(args: argparse.Namespace) -> dict[str, Any]:
    gateway = create_gateway(settings_from_env())
    claims = gateway.verify(args.token)
    return {"claims": claims.to_payload()}


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    from .integrations.fastapi.app import create_app

    settings = settings_from_env()
    log_config = configure_logging(settings.log_level)

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Server running on http://%s:%s/", host, port)

    uvicorn.run(create_app(settings), host=host, port=port, log_config=log_config)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    load_env_file()

    if args.command == "serve":
        _serve(args)
        return

    try:
        summary = _issue(args) if args.command == "issue" else _verify(args)
    except (AuthenticationError, InternalAuthError, ValueError, RuntimeError) as exc:
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        sys.exit(1)

    json.dump({"ok": True, **summary}, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
