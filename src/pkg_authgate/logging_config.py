"""
Logging configuration for the gateway process.
"""

import logging
import logging.config
from typing import Any, Dict


def get_logging_config(level: str = "info") -> Dict[str, Any]:
    """Get logging configuration for the package and uvicorn loggers."""
    level_name = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "pkg_authgate": {
                "handlers": ["default"],
                "level": level_name,
                "propagate": False,
            },
            "uvicorn": {
                "handlers": ["default"],
                "level": level_name,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": level_name,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["default"],
            "level": "WARNING",
        },
    }


def configure_logging(level: str = "info") -> Dict[str, Any]:
    """Apply the logging configuration and return it (uvicorn takes it as log_config)."""
    config = get_logging_config(level)
    logging.config.dictConfig(config)
    return config
