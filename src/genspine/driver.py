"""
Generator synthesis: the transient driver program.

The orchestrator never imports the user's description. It writes a small
driver program instead, and the driver, running in its own process, imports
the description, runs the selected generators and writes their files.

Architecture:
    ```
    DriverSpec(generators, description, scaffold, version)
          │
          ▼
    DriverFile ──► sections:
                     header  (imports, declared generously)
                     body    (driver/main.py.j2)
          │
          ▼
    driver/main.py:
        --output / --version flags, version gate
        evaluator.run(DESCRIPTION) ──► roots
        server.generate(roots) ... (selection order, first error aborts)
        Writer(output).write(...) ──► sorted paths on stdout
    ```

Example:
    >>> spec = DriverSpec.from_commands(["server", "openapi"], "design.account")
    >>> driver_file(spec).output_path(set())
    'driver/main.py'
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from genspine.codegen import GeneratedFile, ImportSpec, NamespaceContext, Section, header, load_template
from genspine.generators import Generator
from genspine.version import VERSION

DRIVER_DIR = "driver"
DRIVER_SOURCE = f"{DRIVER_DIR}/main.py"

_main_template = load_template("driver/main.py.j2")


@dataclass(frozen=True)
class DriverSpec:
    """What the driver runs.

    Attributes:
        generators: Generators to invoke, in order
        description: Dotted module path of the description
        scaffold: Whether the scaffold generator runs last
        version: genspine version embedded in the driver
    """

    generators: tuple[Generator, ...]
    description: str
    scaffold: bool = False
    version: str = VERSION

    @classmethod
    def from_commands(
        cls,
        commands: Iterable[str],
        description: str,
        *,
        scaffold: bool = False,
        version: str = VERSION,
    ) -> DriverSpec:
        """Build a spec from command names.

        Raises:
            ValueError: a command name is unknown.
        """
        generators = [Generator.from_command(c) for c in commands]
        if scaffold and Generator.SCAFFOLD not in generators:
            generators.append(Generator.SCAFFOLD)
        return cls(
            generators=tuple(generators),
            description=description,
            scaffold=scaffold,
            version=version,
        )


class DriverFile(GeneratedFile):
    """The driver program source."""

    def __init__(self, spec: DriverSpec):
        super().__init__(DRIVER_SOURCE)
        self.spec = spec

    def sections(self, namespace: NamespaceContext) -> list[Section]:
        imports = [
            ImportSpec("__future__", symbols=("annotations",)),
            ImportSpec("argparse"),
            ImportSpec("json"),
            ImportSpec("os"),
            ImportSpec("sys"),
            ImportSpec("typing", symbols=("NoReturn",)),
            ImportSpec("genspine.evaluator", name="evaluator"),
            ImportSpec("genspine.codegen", symbols=("Writer",)),
            ImportSpec("genspine.core.errors", symbols=("GenspineError",)),
            ImportSpec("genspine.core.logging", symbols=("configure_logging",)),
            ImportSpec("genspine.generators", symbols=tuple(g.value for g in Generator)),
        ]
        return [
            header("Generator driver", imports),
            Section(
                _main_template,
                {
                    "version": self.spec.version,
                    "description": self.spec.description,
                    "generators": [g.value for g in self.spec.generators],
                },
            ),
        ]


def driver_file(spec: DriverSpec) -> DriverFile:
    """Return the driver File for ``spec``."""
    return DriverFile(spec)
