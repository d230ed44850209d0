"""
genspine: two-stage code generation for service descriptions.

genspine does not write generated code directly. It synthesizes a small
driver program, builds it with the host Python toolchain, runs it in a child
process and relays the list of files the driver wrote.

Example:
    >>> from genspine.orchestrator import Orchestrator
    >>> out = Orchestrator().generate(["server", "openapi"], "design.account")
    >>> print(out)
    gen/account/service.py
    gen/http/account/server.py
    gen/http/openapi.json
"""

from genspine.version import VERSION, version

__version__ = VERSION

__all__ = [
    "VERSION",
    "version",
    "__version__",
]
