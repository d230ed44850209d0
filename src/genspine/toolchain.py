"""
Host toolchain adapter: build and run the driver.

"Compiling" a workspace byte-compiles the driver source in a child
interpreter (``python -m py_compile``), which reports syntax errors with the
compiler's own diagnostic, then packages the driver directory into an
executable zip application. Running the driver starts the same interpreter on
that archive.

Architecture Decisions:
    - subprocess for compilation and execution: the orchestrator never loads
      the driver or the description in its own process.
    - Blocking calls with full output capture; no timeouts.
    - The interpreter is invoked explicitly rather than through the archive
      shebang so paths with spaces and Windows behave the same.

Tags:
    toolchain, subprocess, zipapp, py_compile
"""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import zipapp
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from genspine.core.errors import CompileError, ToolchainError
from genspine.core.logging import get_logger
from genspine.driver import DRIVER_DIR, DRIVER_SOURCE

logger = get_logger(__name__)


def executable_name() -> str:
    """Platform-appropriate file name of the packaged driver."""
    if os.name == "nt":
        return "genspine-driver.pyz"
    return "genspine-driver"


@dataclass
class ProcessResult:
    """Outcome of a child process."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        return self.stdout + self.stderr


class PythonToolchain:
    """Builds and runs drivers with a Python interpreter.

    Parameters
    ----------
    python
        Path of the interpreter.
    """

    def __init__(self, python: str) -> None:
        self.python = python

    @classmethod
    def find(cls, python: str) -> PythonToolchain:
        """Locate ``python`` as a path or on ``PATH``.

        Raises:
            ToolchainError: no such interpreter.
        """
        if os.path.isfile(python):
            return cls(python)
        found = shutil.which(python)
        if found is None:
            raise ToolchainError(
                f'failed to find a Python interpreter "{python}", looked in "{os.environ.get("PATH", "")}"'
            )
        return cls(found)

    def build(self, workspace: Path) -> Path:
        """Compile the driver in ``workspace`` and package it.

        Returns:
            Path of the packaged driver.

        Raises:
            CompileError: compilation failed; the message holds the
                compiler's combined output verbatim.
        """
        command = [self.python, "-m", "py_compile", DRIVER_SOURCE]
        logger.debug("toolchain.compile", command=shlex.join(command), workspace=str(workspace))
        try:
            completed = subprocess.run(
                command,
                cwd=workspace,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise CompileError(str(e), cause=e).with_context(command=shlex.join(command)) from e

        if completed.returncode != 0:
            output = completed.stdout or f"exit status {completed.returncode}"
            raise CompileError(output).with_context(command=shlex.join(command))

        target = workspace / executable_name()
        try:
            zipapp.create_archive(
                workspace / DRIVER_DIR,
                target=target,
                interpreter=self.python,
                main="main:main",
                filter=lambda p: p.suffix == ".py",
            )
        except (OSError, zipapp.ZipAppError) as e:
            raise CompileError(str(e), cause=e) from e
        return target

    def execute(
        self,
        executable: Path,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        """Run the packaged driver and wait for it to exit.

        Raises:
            ToolchainError: the process could not be started.
        """
        command = [self.python, str(executable), *args]
        logger.debug("toolchain.execute", command=shlex.join(command))
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=dict(env) if env is not None else None,
            )
        except OSError as e:
            raise ToolchainError(f"cannot run generator: {e}", cause=e) from e
        return ProcessResult(
            command=command,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
