"""
Structured error types for genspine.

Every failure the pipeline can produce is a GenspineError subclass carrying a
category, a structured context (stage, path, generator, command) and an
optional chained cause. Nothing in genspine is retried: each error class
describes a condition that fails the run fast and loud.

Manifesto:
    - **Typed Error Hierarchy:** One class per failure domain
    - **Rich Context:** Errors carry the stage, file and generator involved
    - **Error Chaining:** Preserve original exceptions while adding context
    - **Verbatim diagnostics:** Compiler and driver output is never truncated

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       GenspineError                              │
        │  (category, context, cause)                                      │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  InputError            EvaluationError      GenerationError      │
        │  (INPUT)               (EVALUATION)         (GENERATION)         │
        │      │                                          │                │
        │  DescriptionNotFound                       RenderError           │
        │  MissingFlagError                          PathCollisionError    │
        │                                                                  │
        │  ToolchainError        NormalizationError   NamespaceError       │
        │  (TOOLCHAIN)           (NORMALIZATION)      (FILESYSTEM)         │
        │      │                                          │                │
        │  CompileError                              WorkspaceError        │
        │  DriverError                                                     │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    Adding context to an error:

    >>> error = GenerationError("no service defined", generator="server")
    >>> error.with_context(path="gen/http/account/server.py")
    GenerationError('server: no service defined', category=GENERATION)
    >>> error.context.path
    'gen/http/account/server.py'

    Chaining errors for root cause:

    >>> try:
    ...     raise OSError("disk full")
    ... except OSError as e:
    ...     raise WorkspaceError("cannot stage workspace", cause=e)
    Traceback (most recent call last):
    ...
    WorkspaceError: cannot stage workspace

Guardrails:
    ❌ DON'T: Raise bare Exception from pipeline code
    ✅ DO: Use the GenspineError subclass of the failing stage

    ❌ DON'T: Shorten compiler or driver output in messages
    ✅ DO: Put the full combined output in the message

Tags:
    error-handling, exception-hierarchy, error-context, genspine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Error categories used for classification and reporting.

    Categories follow the failure taxonomy of a generation run:

    - **INPUT:** unresolvable description, missing mandatory flags
    - **EVALUATION:** the description itself is invalid
    - **GENERATION:** a concrete generator failed
    - **TOOLCHAIN:** the host compiler or the driver process failed
    - **NORMALIZATION:** syntactically invalid generated source
    - **FILESYSTEM:** workspace or output directory problems
    - **INTERNAL:** anything else
    """

    INPUT = "INPUT"
    EVALUATION = "EVALUATION"
    GENERATION = "GENERATION"
    TOOLCHAIN = "TOOLCHAIN"
    NORMALIZATION = "NORMALIZATION"
    FILESYSTEM = "FILESYSTEM"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        stage: Orchestrator stage the error occurred in
        path: File path involved (output file, workspace, description)
        generator: Name of the concrete generator that failed
        command: Command line of the failing subprocess
        metadata: Additional key-value pairs
    """

    stage: str | None = None
    path: str | None = None
    generator: str | None = None
    command: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["stage", "path", "generator", "command"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class GenspineError(Exception):
    """
    Base exception for all genspine errors.

    Subclasses set ``default_category``. The message is what the user sees:
    the CLI prints it verbatim on stderr.

    Examples:
        >>> error = GenspineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'GenspineError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> GenspineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise CompileError(output).with_context(stage="COMPILED")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }

        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# INPUT ERRORS
# =============================================================================


class InputError(GenspineError):
    """Invalid caller input. Reported immediately, nothing is generated."""

    default_category = ErrorCategory.INPUT


class DescriptionNotFoundError(InputError):
    """The description module cannot be found on the import path."""

    def __init__(self, description: str, message: str | None = None, **kwargs: Any):
        self.description = description
        super().__init__(
            message or f'cannot find description module "{description}"', **kwargs
        )


class MissingFlagError(InputError):
    """A mandatory flag was not given."""

    def __init__(self, flag: str, **kwargs: Any):
        self.flag = flag
        super().__init__(f"missing {flag} flag", **kwargs)


# =============================================================================
# EVALUATION ERRORS
# =============================================================================


class EvaluationError(GenspineError):
    """
    The description is invalid.

    Holds every description-level problem found; the message lists them one
    per line.
    """

    default_category = ErrorCategory.EVALUATION

    def __init__(self, errors: list[str] | str, **kwargs: Any):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("\n".join(self.errors), **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = self.errors
        return result


# =============================================================================
# GENERATION ERRORS
# =============================================================================


class GenerationError(GenspineError):
    """A concrete generator failed. Aborts the whole run."""

    default_category = ErrorCategory.GENERATION

    def __init__(self, message: str, *, generator: str | None = None, **kwargs: Any):
        if generator:
            message = f"{generator}: {message}"
        super().__init__(message, **kwargs)
        self.generator = generator
        if generator:
            self.context.generator = generator


class RenderError(GenerationError):
    """A section template failed to render."""

    pass


class PathCollisionError(GenerationError):
    """A file asked for an output path already written in the same session."""

    def __init__(self, path: str, message: str | None = None, **kwargs: Any):
        self.path = path
        super().__init__(message or f"output path {path} is already reserved", **kwargs)
        self.context.path = path


# =============================================================================
# TOOLCHAIN ERRORS
# =============================================================================


class ToolchainError(GenspineError):
    """The host toolchain is unavailable or failed."""

    default_category = ErrorCategory.TOOLCHAIN


class CompileError(ToolchainError):
    """Building the driver failed. The message holds the compiler output."""

    def __init__(self, output: str, **kwargs: Any):
        self.output = output
        super().__init__(f"failed to compile generator: {output}", **kwargs)


class DriverError(ToolchainError):
    """The driver process exited non-zero."""

    def __init__(self, reason: str, output: str, *, returncode: int | None = None, **kwargs: Any):
        self.reason = reason
        self.output = output
        self.returncode = returncode
        super().__init__(f"generator failed: {reason}\n{output}", **kwargs)


# =============================================================================
# NORMALIZATION ERRORS
# =============================================================================


class NormalizationError(GenspineError):
    """
    Generated source could not be parsed or formatted.

    The message includes the diagnostic and the raw content so the author
    of the generator can see exactly what was produced.
    """

    default_category = ErrorCategory.NORMALIZATION

    def __init__(self, path: str, diagnostic: str, content: str, **kwargs: Any):
        self.path = path
        self.diagnostic = diagnostic
        self.content = content
        super().__init__(f"{diagnostic}\n========\nContent:\n{content}", **kwargs)
        self.context.path = path


# =============================================================================
# FILESYSTEM ERRORS
# =============================================================================


class FilesystemError(GenspineError):
    """Filesystem layout problem."""

    default_category = ErrorCategory.FILESYSTEM


class NamespaceError(FilesystemError):
    """The import package of an output directory cannot be determined."""

    def __init__(self, directory: str, message: str | None = None, **kwargs: Any):
        self.directory = directory
        super().__init__(
            message or f"cannot determine import package of {directory}", **kwargs
        )
        self.context.path = directory


class WorkspaceError(FilesystemError):
    """The transient workspace could not be staged."""

    pass


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "GenspineError",
    "InputError",
    "DescriptionNotFoundError",
    "MissingFlagError",
    "EvaluationError",
    "GenerationError",
    "RenderError",
    "PathCollisionError",
    "ToolchainError",
    "CompileError",
    "DriverError",
    "NormalizationError",
    "FilesystemError",
    "NamespaceError",
    "WorkspaceError",
]
