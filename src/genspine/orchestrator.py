"""
Build-and-execute orchestrator.

Turns a list of generator commands and a description module path into
generated files, without ever importing the description itself:

    ```
    START
      │  PathFinder.find_spec(part, parent path), part by part
      ▼
    DESCRIPTION_RESOLVED
      │  tempfile.mkdtemp(prefix="genspine")
      ▼
    WORKSPACE_STAGED
      │  Writer(workspace).write(driver_file(spec))
      ▼
    DRIVER_WRITTEN
      │  PythonToolchain.build(workspace)
      ▼
    COMPILED
      │  python genspine-driver --version=V --output=DIR
      ▼
    EXECUTED ──► DONE (driver stdout returned)

    any stage ──► FAILED (typed GenspineError tagged with the stage)
    ```

A successful run removes its workspace unless debugging is on, in which case
the workspace is kept and its location logged. A failed run keeps the
workspace for inspection; the error context names it.

Example:
    >>> orchestrator = Orchestrator()
    >>> print(orchestrator.generate(["openapi"], "design.account"))  # doctest: +SKIP
    gen/http/openapi.json
"""

from __future__ import annotations

import importlib
import os
import shutil
import sys
import tempfile
from collections.abc import Iterable
from enum import Enum
from importlib.machinery import PathFinder
from pathlib import Path

import genspine
from genspine.codegen import Writer
from genspine.core.errors import (
    DescriptionNotFoundError,
    DriverError,
    GenspineError,
    MissingFlagError,
    WorkspaceError,
)
from genspine.core.logging import LogContext, get_logger
from genspine.core.settings import GenspineSettings, get_settings
from genspine.driver import DriverSpec, driver_file
from genspine.toolchain import PythonToolchain
from genspine.version import VERSION

logger = get_logger(__name__)

WORKSPACE_PREFIX = "genspine"


class Stage(str, Enum):
    """Stages of an orchestrator run, in order."""

    START = "START"
    DESCRIPTION_RESOLVED = "DESCRIPTION_RESOLVED"
    WORKSPACE_STAGED = "WORKSPACE_STAGED"
    DRIVER_WRITTEN = "DRIVER_WRITTEN"
    COMPILED = "COMPILED"
    EXECUTED = "EXECUTED"
    DONE = "DONE"
    FAILED = "FAILED"


class Orchestrator:
    """Synthesizes, builds and runs the generator driver.

    Parameters
    ----------
    settings
        Configuration; defaults to :func:`get_settings`.
    toolchain
        Builds and runs the driver; defaults to the configured interpreter.
    """

    def __init__(
        self,
        settings: GenspineSettings | None = None,
        toolchain: PythonToolchain | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._toolchain = toolchain
        self.stage = Stage.START

    @property
    def toolchain(self) -> PythonToolchain:
        if self._toolchain is None:
            self._toolchain = PythonToolchain.find(self.settings.python)
        return self._toolchain

    def generate(
        self,
        commands: Iterable[str],
        description: str,
        output: str = ".",
        scaffold: bool = False,
        debug: bool = False,
    ) -> str:
        """Run the generators named by ``commands`` against ``description``.

        Returns:
            The driver's standard output: the written paths, sorted, one
            per line.

        Raises:
            GenspineError: the run failed; ``context.stage`` names the
                last stage reached.
        """
        debug = debug or self.settings.debug
        spec = DriverSpec.from_commands(commands, description, scaffold=scaffold, version=VERSION)
        self.stage = Stage.START
        workspace: Path | None = None

        with LogContext(description=description):
            try:
                if not output:
                    raise MissingFlagError("output")
                self._resolve(description)
                self._advance(Stage.DESCRIPTION_RESOLVED)

                workspace = self._stage_workspace()
                self._advance(Stage.WORKSPACE_STAGED, workspace=str(workspace))

                Writer(str(workspace)).write(driver_file(spec))
                self._advance(Stage.DRIVER_WRITTEN)

                executable = self.toolchain.build(workspace)
                self._advance(Stage.COMPILED, executable=str(executable))

                result = self.toolchain.execute(
                    executable,
                    [f"--version={spec.version}", f"--output={output}"],
                    env=self._driver_env(),
                )
                if result.returncode != 0:
                    raise DriverError(
                        f"exit status {result.returncode}",
                        result.output,
                        returncode=result.returncode,
                    ).with_context(command=" ".join(result.command))
                self._advance(Stage.EXECUTED)

                self._advance(Stage.DONE)
            except GenspineError as e:
                failed_in = self.stage
                self.stage = Stage.FAILED
                e.with_context(stage=failed_in.value)
                if workspace is not None:
                    e.with_context(workspace=str(workspace))
                logger.warning(
                    "orchestrator.failed",
                    stage=failed_in.value,
                    error_type=type(e).__name__,
                    workspace=str(workspace) if workspace else None,
                )
                raise

        if debug:
            logger.info("orchestrator.workspace_kept", workspace=str(workspace))
        else:
            shutil.rmtree(workspace, ignore_errors=True)
        return result.stdout

    def _advance(self, stage: Stage, **kw: str) -> None:
        self.stage = stage
        logger.debug("orchestrator.stage", stage=stage.value, **kw)

    def _search_path(self) -> list[str]:
        return [os.getcwd(), *self.settings.python_path]

    def _resolve(self, description: str) -> None:
        """Check the description module exists without executing it.

        Each dotted part is looked up in the directories of its parent
        package, so no enclosing package is imported either.
        """
        if not description:
            raise DescriptionNotFoundError(description, "missing description module path")

        importlib.invalidate_caches()
        parts = description.split(".")
        path: list[str] | None = [*self._search_path(), *sys.path]
        for i, part in enumerate(parts):
            if path is None or not part.isidentifier():
                raise DescriptionNotFoundError(description)
            try:
                spec = PathFinder.find_spec(".".join(parts[: i + 1]), path)
            except (ImportError, ValueError) as e:
                raise DescriptionNotFoundError(description, cause=e) from e
            if spec is None:
                raise DescriptionNotFoundError(description)
            path = spec.submodule_search_locations
            if path is not None:
                path = list(path)

    def _stage_workspace(self) -> Path:
        """Create the workspace, falling back to the system temp directory."""
        parent = self.settings.workspace_root or Path.cwd()
        try:
            return Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=parent))
        except OSError as e:
            logger.debug("orchestrator.workspace_fallback", parent=str(parent), error=str(e))
        try:
            return Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX))
        except OSError as e:
            raise WorkspaceError(f"failed to create workspace: {e}", cause=e) from e

    def _driver_env(self) -> dict[str, str]:
        """Environment of the driver process.

        ``PYTHONPATH`` lets the driver import the description (working
        directory and extra paths) and genspine itself.
        """
        package_root = str(Path(genspine.__file__).resolve().parent.parent)
        paths = [*self._search_path(), package_root]
        existing = os.environ.get("PYTHONPATH")
        if existing:
            paths.append(existing)

        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(paths)
        env["GENSPINE_LOG_LEVEL"] = self.settings.log_level
        return env
