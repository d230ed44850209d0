"""
Description evaluation.

A description is a Python module that declares roots (for example an
``APIExpr`` built with :mod:`genspine.design`) when it is imported. Declaring
a root registers it with the global evaluation ``context``. Running the
description imports the module, then validates and finalizes every root.
Problems are collected rather than raised one by one, so a single run
reports every mistake in the description.

Architecture:
    ```
    run("design.account")
          │
          ├──► import design.account ──► api(...) ──► context.register(root)
          │
          ├──► context.errors?  ──► EvaluationError (all lines)
          ├──► root.validate()  ──► EvaluationError (all lines)
          └──► root.finalize()
                    │
                    ▼
             context.roots() ──► [APIExpr, ...]
    ```

Only the driver process runs descriptions. The orchestrator only checks
that the description module can be found.
"""

from __future__ import annotations

import importlib
import sys
from abc import ABC, abstractmethod

from genspine.core.errors import EvaluationError
from genspine.core.logging import get_logger

logger = get_logger(__name__)


class Root(ABC):
    """A top-level expression produced by a description."""

    name: str

    @abstractmethod
    def validate(self) -> list[str]:
        """Return the description errors of this root, empty when valid."""

    def finalize(self) -> None:
        """Complete the root once every root validated."""


class EvalContext:
    """Roots and errors collected while a description is evaluated."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self._roots: list[Root] = []
        self._evaluated = False

    def register(self, root: Root) -> Root:
        """Record a root declared by the description."""
        if any(r.name == root.name and type(r) is type(root) for r in self._roots):
            self.record_error(f'{type(root).__name__} "{root.name}" is declared more than once')
        else:
            self._roots.append(root)
        return root

    def record_error(self, message: str) -> None:
        """Record a description error detected while declaring expressions."""
        self.errors.append(message)

    def run(self) -> None:
        """Validate and finalize the registered roots.

        Raises:
            EvaluationError: listing every error found.
        """
        if self.errors:
            raise EvaluationError(self.errors)

        errors: list[str] = []
        for root in self._roots:
            errors.extend(root.validate())
        if errors:
            raise EvaluationError(errors)

        for root in self._roots:
            root.finalize()
        self._evaluated = True
        logger.debug("evaluator.done", roots=[r.name for r in self._roots])

    def roots(self) -> list[Root]:
        """Return the evaluated roots.

        Raises:
            EvaluationError: the description was not evaluated or declared no roots.
        """
        if not self._evaluated:
            raise EvaluationError("description has not been evaluated")
        if not self._roots:
            raise EvaluationError("description declares no roots")
        return list(self._roots)

    def reset(self) -> None:
        """Forget every root and error."""
        self.errors.clear()
        self._roots.clear()
        self._evaluated = False


context = EvalContext()


def run(description: str) -> list[Root]:
    """Import and evaluate a description module, returning its roots.

    A module imported earlier in the same process is reloaded so its roots
    are declared again against the current context.

    Raises:
        EvaluationError: the module cannot be imported or the description is invalid.
    """
    try:
        if description in sys.modules:
            importlib.reload(sys.modules[description])
        else:
            importlib.import_module(description)
    except ImportError as e:
        raise EvaluationError(f"cannot import description {description}: {e}", cause=e) from e

    context.run()
    return context.roots()
