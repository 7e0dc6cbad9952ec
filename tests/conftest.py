"""tests/conftest.py — Shared fixtures: a fake copilot executable."""
import shlex
import sys
import textwrap

import pytest

FAKE_COPILOT = textwrap.dedent("""
    import json
    import os
    import sys
    import time

    mode = os.environ.get("FAKE_COPILOT_MODE", "echo")

    if mode == "echo":
        print(json.dumps({
            "argv": sys.argv[1:],
            "color": os.environ.get("COLOR"),
            "extra": os.environ.get("FAKE_COPILOT_EXTRA"),
        }))
    elif mode == "payload":
        with open(os.environ["FAKE_COPILOT_PAYLOAD"], "rb") as fh:
            sys.stdout.buffer.write(fh.read())
        if os.environ.get("FAKE_COPILOT_STDERR"):
            sys.stderr.write(os.environ["FAKE_COPILOT_STDERR"] + "\\n")
    elif mode == "fail":
        print("deploying...", flush=True)
        sys.stderr.write("boom\\n")
        sys.exit(int(os.environ.get("FAKE_COPILOT_EXIT", "1")))
    elif mode == "sleep":
        print("started", flush=True)
        time.sleep(60)
""")


@pytest.fixture
def fake_copilot(tmp_path):
    script = tmp_path / "fake_copilot.py"
    script.write_text(FAKE_COPILOT, encoding="utf-8")
    binary = tmp_path / "copilot"
    binary.write_text(
        f"#!/bin/sh\nexec {shlex.quote(sys.executable)} {shlex.quote(str(script))} \"$@\"\n",
        encoding="utf-8",
    )
    binary.chmod(0o755)
    return binary


@pytest.fixture
def payload(tmp_path, monkeypatch):
    """Make the fake copilot print the given bytes on stdout."""
    def _set(data: bytes):
        path = tmp_path / "payload.json"
        path.write_bytes(data)
        monkeypatch.setenv("FAKE_COPILOT_MODE", "payload")
        monkeypatch.setenv("FAKE_COPILOT_PAYLOAD", str(path))
        return path
    return _set
