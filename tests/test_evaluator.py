"""
Tests for genspine.evaluator.

Covers:
- Running a description module and retrieving its roots
- Aggregated description errors
- Roots retrieval guards
- Re-running a description already imported in the process
"""

from dataclasses import dataclass

import pytest

from genspine import evaluator
from genspine.core.errors import EvaluationError
from genspine.design import APIExpr


@dataclass
class FakeRoot(evaluator.Root):
    name: str
    errors: tuple = ()
    finalized: bool = False

    def validate(self):
        return list(self.errors)

    def finalize(self):
        self.finalized = True


class TestRun:
    """evaluator.run()."""

    def test_returns_roots(self):
        roots = evaluator.run("bank_design")
        assert len(roots) == 1
        assert isinstance(roots[0], APIExpr)
        assert roots[0].name == "bank"

    def test_rerun_declares_roots_again(self):
        """A module already imported is reloaded against the current context."""
        evaluator.run("bank_design")
        evaluator.context.reset()
        assert [r.name for r in evaluator.run("bank_design")] == ["bank"]

    def test_invalid_description_reports_every_error(self):
        with pytest.raises(EvaluationError) as exc_info:
            evaluator.run("invalid_design")
        errors = exc_info.value.errors
        assert len(errors) == 2
        assert 'unsupported HTTP verb "FETCH"' in errors[0]
        assert 'path parameter "id" is not a payload attribute' in errors[1]
        assert str(exc_info.value) == "\n".join(errors)

    def test_missing_module(self):
        with pytest.raises(EvaluationError, match="cannot import description"):
            evaluator.run("no_such_design_module")


class TestEvalContext:
    """Registration, validation and finalization."""

    def test_finalize_after_validation(self):
        ctx = evaluator.EvalContext()
        root = ctx.register(FakeRoot("a"))
        ctx.run()
        assert root.finalized
        assert ctx.roots() == [root]

    def test_validation_errors_aggregated(self):
        ctx = evaluator.EvalContext()
        ctx.register(FakeRoot("a", errors=("one",)))
        ctx.register(FakeRoot("b", errors=("two", "three")))
        with pytest.raises(EvaluationError) as exc_info:
            ctx.run()
        assert exc_info.value.errors == ["one", "two", "three"]

    def test_no_finalize_when_invalid(self):
        ctx = evaluator.EvalContext()
        root = ctx.register(FakeRoot("a", errors=("bad",)))
        with pytest.raises(EvaluationError):
            ctx.run()
        assert not root.finalized

    def test_duplicate_root(self):
        ctx = evaluator.EvalContext()
        ctx.register(FakeRoot("a"))
        ctx.register(FakeRoot("a"))
        with pytest.raises(EvaluationError, match='FakeRoot "a" is declared more than once'):
            ctx.run()

    def test_roots_before_run(self):
        ctx = evaluator.EvalContext()
        ctx.register(FakeRoot("a"))
        with pytest.raises(EvaluationError, match="not been evaluated"):
            ctx.roots()

    def test_roots_empty(self):
        ctx = evaluator.EvalContext()
        ctx.run()
        with pytest.raises(EvaluationError, match="no roots"):
            ctx.roots()

    def test_reset(self):
        ctx = evaluator.EvalContext()
        ctx.register(FakeRoot("a"))
        ctx.record_error("boom")
        ctx.reset()
        assert ctx.errors == []
        ctx.run()
        with pytest.raises(EvaluationError):
            ctx.roots()
