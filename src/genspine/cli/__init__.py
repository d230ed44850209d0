"""genspine command-line interface."""

from genspine.cli.app import app

__all__ = ["app"]
