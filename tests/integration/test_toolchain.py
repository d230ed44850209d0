"""Tests for genspine.toolchain with a real interpreter."""

import os
import sys
from pathlib import Path

import pytest

from genspine.codegen import Writer
from genspine.core.errors import CompileError, ToolchainError
from genspine.driver import DriverSpec, driver_file
from genspine.toolchain import PythonToolchain, executable_name
from genspine.version import VERSION

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture
def toolchain():
    return PythonToolchain.find(sys.executable)


class TestFind:
    def test_missing_interpreter(self):
        with pytest.raises(ToolchainError, match="failed to find a Python interpreter"):
            PythonToolchain.find("no-such-python-interpreter")


class TestBuild:
    """Compiling and packaging the driver."""

    def test_compile_error_carries_compiler_output(self, toolchain, tmp_path):
        (tmp_path / "driver").mkdir()
        (tmp_path / "driver" / "main.py").write_text("def main(:\n    pass\n")

        with pytest.raises(CompileError) as exc_info:
            toolchain.build(tmp_path)

        message = str(exc_info.value)
        assert message.startswith("failed to compile generator: ")
        assert "SyntaxError" in message
        assert not (tmp_path / executable_name()).exists()

    def test_packaged_driver(self, toolchain, tmp_path):
        Writer(tmp_path).write(driver_file(DriverSpec.from_commands(["openapi"], "bank_design")))
        executable = toolchain.build(tmp_path)
        assert executable == tmp_path / executable_name()
        assert executable.is_file()


class TestExecute:
    """Running the packaged driver."""

    @pytest.fixture
    def env(self, designs_dir):
        paths = [str(SRC_DIR), str(designs_dir), os.environ.get("PYTHONPATH", "")]
        return {**os.environ, "PYTHONPATH": os.pathsep.join(p for p in paths if p)}

    @pytest.fixture
    def executable(self, toolchain, tmp_path):
        workspace = tmp_path / "workspace"
        Writer(workspace).write(driver_file(DriverSpec.from_commands(["openapi"], "bank_design")))
        return toolchain.build(workspace)

    def test_version_gate(self, toolchain, executable, env, tmp_path):
        """A mismatched version exits 1 before anything is written."""
        out = tmp_path / "out"
        result = toolchain.execute(executable, ["--version=0.0.1", f"--output={out}"], env=env)

        assert result.returncode == 1
        assert result.stdout == ""
        assert f"compiled generator is running {VERSION}" in result.stderr
        assert not out.exists()

    def test_missing_flag(self, toolchain, executable, env):
        result = toolchain.execute(executable, [f"--version={VERSION}"], env=env)
        assert result.returncode == 1
        assert result.output == "missing output flag\n"
