"""Shared primitives: errors, logging and settings."""

from genspine.core.errors import ErrorCategory, GenspineError
from genspine.core.logging import configure_logging, get_logger
from genspine.core.settings import GenspineSettings, get_settings

__all__ = [
    "ErrorCategory",
    "GenspineError",
    "configure_logging",
    "get_logger",
    "GenspineSettings",
    "get_settings",
]
