"""Settings for the genspine orchestrator.

Configuration is read from ``GENSPINE_*`` environment variables and an
optional ``.env`` file in the working directory.

Fields
──────
debug          : Keep the workspace after the run and log its location
log_level      : structlog log level
json_logs      : Force JSON (True) or console (False) logs; auto when unset
python         : Interpreter used to compile and run the driver
python_path    : Extra import roots searched for description modules
workspace_root : Parent directory for workspaces (defaults to the cwd)

Examples:
    >>> import os
    >>> os.environ["GENSPINE_LOG_LEVEL"] = "DEBUG"
    >>> get_settings(_force_reload=True).log_level
    'DEBUG'
"""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenspineSettings(BaseSettings):
    """Orchestrator settings, prefix ``GENSPINE_``."""

    model_config = SettingsConfigDict(
        env_prefix="GENSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "WARNING"
    json_logs: bool | None = None

    # ── Toolchain ────────────────────────────────────────────────
    python: str = Field(
        default_factory=lambda: sys.executable,
        description="Interpreter used to compile and execute the driver",
    )
    python_path: list[str] = Field(
        default_factory=list,
        description="Extra directories searched for description modules",
    )

    # ── Workspace ────────────────────────────────────────────────
    workspace_root: Path | None = None


_settings: GenspineSettings | None = None


def get_settings(*, _force_reload: bool = False) -> GenspineSettings:
    """Load and cache the settings."""
    global _settings
    if _settings is None or _force_reload:
        _settings = GenspineSettings()
    return _settings
