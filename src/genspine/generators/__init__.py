"""
Concrete generators.

Each generator module exposes ``generate(roots) -> list[File]`` and raises
``GenerationError`` naming itself when it cannot produce its files. The set
of generators is closed: :class:`Generator` lists them, and the synthesized
driver calls the module of each selected member in order.
"""

from __future__ import annotations

from enum import Enum
from importlib import import_module

from genspine.codegen import File
from genspine.evaluator import Root


class Generator(str, Enum):
    """Known generators, by command name."""

    SERVER = "server"
    CLIENT = "client"
    OPENAPI = "openapi"
    SCAFFOLD = "scaffold"

    @property
    def module(self) -> str:
        """Dotted path of the generator module."""
        return f"genspine.generators.{self.value}"

    @classmethod
    def from_command(cls, command: str) -> Generator:
        """Map a command name to its generator.

        Raises:
            ValueError: the name is not a known command. Callers only pass
                names they validated, so this is a programming error.
        """
        try:
            return cls(command)
        except ValueError:
            raise ValueError(f"unknown command {command!r}") from None


COMMANDS = tuple(g.value for g in Generator if g is not Generator.SCAFFOLD)


def generate(generator: Generator, roots: list[Root]) -> list[File]:
    """Run ``generator`` against ``roots`` in the current process."""
    return import_module(generator.module).generate(roots)


__all__ = ["COMMANDS", "Generator", "generate"]
