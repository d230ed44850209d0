"""Release version of genspine.

The version is embedded into every synthesized driver and checked by the
driver at startup, so a stale driver never runs against a newer toolchain.
"""

VERSION = "0.3.0"


def version() -> str:
    """Return the genspine release version."""
    return VERSION
