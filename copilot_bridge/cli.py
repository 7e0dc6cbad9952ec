"""
Copilot Bridge — CLI handle.
One method per copilot operation: build argv, run it, decode --json output.

Usage from a test suite:
    from copilot_bridge.cli import CLI
    from copilot_bridge.models import AppInitRequest

    cli = CLI()                                  # resolves /bin/copilot
    cli.app_init(AppInitRequest(app_name="demo"))
    app = cli.app_show("demo")                   # -> AppShowOutput
"""
import logging
import os
import shlex
from pathlib import Path
from typing import IO, Dict, List, Optional, Sequence, Union

from . import commands
from .config import COPILOT_CLI_PATH, EXEC_TIMEOUT_S
from .errors import SetupError
from .executor import ExecutionOutcome, run_command
from .models import (
    AppInitRequest, EnvInitRequest, EnvShowRequest, InitRequest,
    SvcDeployInput, SvcInitRequest, SvcLogsRequest, SvcShowRequest,
    SvcStatusRequest, TaskRunInput,
)
from .outputs import (
    AppShowOutput, EnvListOutput, EnvShowOutput, SvcListOutput,
    SvcLogsOutput, SvcShowOutput, SvcStatusOutput,
    decode_app_show, decode_env_list, decode_env_show, decode_svc_list,
    decode_svc_logs, decode_svc_show, decode_svc_status,
)

logger = logging.getLogger(__name__)


def resolve_executable(path: Union[str, Path, None] = None) -> Path:
    p = Path(path) if path is not None else COPILOT_CLI_PATH
    if not p.is_file():
        raise SetupError(f"copilot executable not found at {p}")
    if not os.access(p, os.X_OK):
        raise SetupError(f"{p} is not executable")
    return p


class CLI:
    """Wrapper around a pre-installed copilot binary. Holds no per-call state."""

    def __init__(
        self,
        path: Union[str, Path, None] = None,
        timeout_s: Optional[float] = EXEC_TIMEOUT_S,
        mirror: Optional[IO[bytes]] = None,
        env: Optional[Dict[str, str]] = None,
    ):
        self._path = resolve_executable(path)
        self._timeout_s = timeout_s
        self._mirror = mirror
        self._env = dict(env or {})

    @property
    def path(self) -> Path:
        return self._path

    def run(self, args: Sequence[str]) -> ExecutionOutcome:
        logger.info("running %s", shlex.join([self._path.name, *args]))
        return run_command(
            self._path, args,
            timeout_s=self._timeout_s,
            mirror=self._mirror,
            env=self._env,
        )

    def _text(self, args: Sequence[str]) -> str:
        return self.run(args).text

    def _json(self, args: Sequence[str]) -> bytes:
        # run() raises on a non-zero exit, so nothing undecodable reaches a decoder
        return self.run(args).stdout

    # ─── Top level ────────────────────────────────────────────────────────────

    def help(self) -> str:
        return self._text(commands.help_args())

    def version(self) -> str:
        return self._text(commands.version_args())

    def init(self, req: InitRequest) -> str:
        return self._text(commands.init_args(req))

    # ─── Applications ─────────────────────────────────────────────────────────

    def app_init(self, req: AppInitRequest) -> str:
        return self._text(commands.app_init_args(req))

    def app_show(self, app_name: str) -> AppShowOutput:
        return decode_app_show(self._json(commands.app_show_args(app_name)))

    def app_list(self) -> str:
        return self._text(commands.app_list_args())

    def app_delete(self) -> str:
        return self._text(commands.app_delete_args())

    # ─── Environments ─────────────────────────────────────────────────────────

    def env_init(self, req: EnvInitRequest) -> str:
        return self._text(commands.env_init_args(req))

    def env_show(self, req: EnvShowRequest) -> EnvShowOutput:
        return decode_env_show(self._json(commands.env_show_args(req)))

    def env_list(self, app_name: str) -> EnvListOutput:
        return decode_env_list(self._json(commands.env_list_args(app_name)))

    def env_delete(self, env_name: str) -> str:
        return self._text(commands.env_delete_args(env_name))

    # ─── Services ─────────────────────────────────────────────────────────────

    def svc_init(self, req: SvcInitRequest) -> str:
        return self._text(commands.svc_init_args(req))

    def svc_show(self, req: SvcShowRequest) -> SvcShowOutput:
        return decode_svc_show(self._json(commands.svc_show_args(req)))

    def svc_status(self, req: SvcStatusRequest) -> SvcStatusOutput:
        return decode_svc_status(self._json(commands.svc_status_args(req)))

    def svc_delete(self, name: str) -> str:
        return self._text(commands.svc_delete_args(name))

    def svc_deploy(self, req: SvcDeployInput) -> str:
        return self._text(commands.svc_deploy_args(req))

    def svc_list(self, app_name: str) -> SvcListOutput:
        return decode_svc_list(self._json(commands.svc_list_args(app_name)))

    def svc_logs(self, req: SvcLogsRequest) -> List[SvcLogsOutput]:
        return decode_svc_logs(self._json(commands.svc_logs_args(req)))

    # ─── Tasks ────────────────────────────────────────────────────────────────

    def task_run(self, req: TaskRunInput) -> str:
        return self._text(commands.task_run_args(req))
