from __future__ import annotations

from .app import create_app, create_router, install_error_handlers

__all__ = [
    "create_app",
    "create_router",
    "install_error_handlers",
]
