"""
Copilot Bridge — Configuration
Defaults for locating and driving the copilot executable.
Every value here can be overridden per CLI instance.
"""
import os
from pathlib import Path

# ─── Executable ───────────────────────────────────────────────────────────────
# The e2e image installs the binary at the filesystem root.
COPILOT_CLI_PATH = Path(os.environ.get("COPILOT_CLI_PATH", "/bin/copilot"))

# ─── Execution ────────────────────────────────────────────────────────────────
EXEC_TIMEOUT_S = float(os.environ.get("COPILOT_EXEC_TIMEOUT_S", 3600))  # 0 = wait forever
READER_JOIN_TIMEOUT_S = 5.0  # once the child is gone, how long to wait for the pipe readers

# Always applied on top of the caller's environment so output stays parseable.
COLOR_ENV = {"COLOR": "false"}
