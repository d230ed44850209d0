"""
Shared pytest fixtures and configuration for genspine tests.

This module provides:
- Import paths for the package sources and the fixture descriptions
- Evaluation context and logging cleanup for test isolation
- Helpers to evaluate descriptions and render files in-process

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.

    def test_something(bank_roots):
        ...
"""

import sys
from pathlib import Path

import pytest
import structlog

# Ensure genspine and the fixture descriptions are importable
TESTS_DIR = Path(__file__).parent
DESIGNS_DIR = TESTS_DIR / "fixtures" / "designs"
sys.path.insert(0, str(TESTS_DIR.parent / "src"))
sys.path.insert(0, str(DESIGNS_DIR))

from genspine import evaluator  # noqa: E402
from genspine.core import settings as settings_module  # noqa: E402
from genspine.core.logging import configure_logging  # noqa: E402


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(TESTS_DIR)

        if "integration" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_context():
    """Start every test with an empty evaluation context."""
    evaluator.context.reset()
    yield
    evaluator.context.reset()


@pytest.fixture(autouse=True)
def clean_logging():
    """Log to stderr during a test; stdout carries only generated paths.

    The configuration is dropped afterwards so no test sees a stream of a
    finished one.
    """
    configure_logging(level="WARNING", json_format=True, stream=sys.stderr)
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Settings come from the test environment only."""
    for name in ("GENSPINE_DEBUG", "GENSPINE_LOG_LEVEL", "GENSPINE_PYTHON_PATH", "GENSPINE_WORKSPACE_ROOT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)


# =============================================================================
# Description Fixtures
# =============================================================================


@pytest.fixture
def designs_dir() -> Path:
    """Directory holding the fixture description modules."""
    return DESIGNS_DIR


@pytest.fixture
def bank_roots():
    """Evaluated roots of the bank description (one service, four methods)."""
    return evaluator.run("bank_design")


@pytest.fixture
def bank_service(bank_roots):
    """The ``account`` service of the bank description."""
    return bank_roots[0].services[0]
