#!/usr/bin/env python3
"""Generate the account service - the full two-stage pipeline.

This example runs the orchestrator in-process: it synthesizes the driver,
compiles it, runs it against ``design.account`` and prints the files the
driver wrote.

Run: python examples/generate_account.py
"""
import os
import sys
from pathlib import Path

from genspine.core.errors import GenspineError
from genspine.core.logging import configure_logging
from genspine.core.settings import GenspineSettings
from genspine.orchestrator import Orchestrator

HERE = Path(__file__).parent


def main():
    print("=" * 60)
    print("genspine: account service")
    print("=" * 60)

    configure_logging(level="INFO", json_format=False)
    os.chdir(HERE)

    # === 1. Server, client and OpenAPI document ===
    print("\n[1] server + client + openapi")
    orchestrator = Orchestrator(settings=GenspineSettings())
    try:
        out = orchestrator.generate(["client", "openapi", "server"], "design.account", output="out", scaffold=True)
    except GenspineError as e:
        print(e.message, file=sys.stderr)
        return 1
    for path in out.splitlines():
        print(f"  {path}")

    # === 2. Re-running keeps the editable stub ===
    print("\n[2] re-run with an edited stub")
    stub = HERE / "out" / "account.py"
    edit = "# edited by hand\n"
    stub.write_text(stub.read_text() + "\n" + edit)
    orchestrator.generate(["server"], "design.account", output="out", scaffold=True)
    print(f"  edit kept: {stub.read_text().endswith(edit)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
