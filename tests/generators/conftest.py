"""Fixtures for importing generated code."""

import importlib
import sys

import pytest

GENERATED_TOP_LEVEL = ("gen", "account")


@pytest.fixture
def load_generated(tmp_path, monkeypatch):
    """Import modules generated under ``tmp_path``; forgotten after the test."""
    monkeypatch.syspath_prepend(str(tmp_path))
    importlib.invalidate_caches()

    def load(module: str):
        return importlib.import_module(module)

    yield load

    for name in list(sys.modules):
        if name.split(".")[0] in GENERATED_TOP_LEVEL:
            del sys.modules[name]
