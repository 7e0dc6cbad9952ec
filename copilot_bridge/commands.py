"""
Copilot Bridge — Command builder.
Turns request models into copilot argument vectors (argv without argv[0]).
Pure functions: a fresh list per call, requests are never touched.
"""
from typing import Dict, Iterable, List, Optional

from .models import (
    AppInitRequest, EnvInitRequest, EnvShowRequest, InitRequest, Network,
    SvcDeployInput, SvcInitRequest, SvcLogsRequest, SvcShowRequest,
    SvcStatusRequest, TaskRunInput, VPCImport, VPCOverride,
)


# ─── Token helpers ────────────────────────────────────────────────────────────

def optional(flag: str, value: str) -> List[str]:
    return [flag, value] if value else []


def switch(flag: str, on: bool) -> List[str]:
    return [flag] if on else []


def pairs(flag: str, mapping: Dict[str, str]) -> List[str]:
    """--flag k1=v1,k2=v2 in insertion order, nothing for an empty mapping."""
    if not mapping:
        return []
    return [flag, ",".join(f"{key}={val}" for key, val in mapping.items())]


def listed(flag: str, values: Iterable[str]) -> List[str]:
    values = list(values)
    if not values:
        return []
    return [flag, ",".join(values)]


# ─── Top level ────────────────────────────────────────────────────────────────

def help_args() -> List[str]:
    return ["--help"]


def version_args() -> List[str]:
    return ["--version"]


def init_args(req: InitRequest) -> List[str]:
    return [
        "init",
        "--app", req.app_name,
        "--name", req.workload_name,
        "--type", req.workload_type,
        "--dockerfile", req.dockerfile,
        *optional("--tag", req.image_tag),
        *optional("--port", req.svc_port),
        *switch("--deploy", req.deploy),
    ]


# ─── Applications ─────────────────────────────────────────────────────────────

def app_init_args(req: AppInitRequest) -> List[str]:
    # The app name is positional and must directly follow the subcommand.
    return [
        "app", "init", req.app_name,
        *optional("--domain", req.domain),
        *pairs("--resource-tags", req.tags),
    ]


def app_show_args(app_name: str) -> List[str]:
    return ["app", "show", "--name", app_name, "--json"]


def app_list_args() -> List[str]:
    return ["app", "ls"]


def app_delete_args() -> List[str]:
    return ["app", "delete", "--yes"]


# ─── Environments ─────────────────────────────────────────────────────────────

def network_args(network: Optional[Network]) -> List[str]:
    if network is None:
        return []
    if isinstance(network, VPCImport):
        return [
            "--import-vpc-id", network.vpc_id,
            *listed("--import-public-subnets", network.public_subnet_ids),
            *listed("--import-private-subnets", network.private_subnet_ids),
        ]
    if isinstance(network, VPCOverride):
        return [
            "--override-vpc-cidr", network.cidr,
            *listed("--override-public-cidrs", network.public_subnet_cidrs),
            *listed("--override-private-cidrs", network.private_subnet_cidrs),
        ]
    raise TypeError(f"unknown network configuration: {type(network).__name__}")


def env_init_args(req: EnvInitRequest) -> List[str]:
    return [
        "env", "init",
        "--name", req.env_name,
        "--app", req.app_name,
        "--profile", req.profile,
        *switch("--prod", req.prod),
        *switch("--default-config", not req.customized_env),
        *network_args(req.network),
    ]


def env_show_args(req: EnvShowRequest) -> List[str]:
    return ["env", "show", "--app", req.app_name, "--name", req.env_name, "--json"]


def env_list_args(app_name: str) -> List[str]:
    return ["env", "ls", "--app", app_name, "--json"]


def env_delete_args(env_name: str) -> List[str]:
    return ["env", "delete", "--name", env_name, "--yes"]


# ─── Services ─────────────────────────────────────────────────────────────────

def svc_init_args(req: SvcInitRequest) -> List[str]:
    return [
        "svc", "init",
        "--name", req.name,
        "--svc-type", req.svc_type,
        "--dockerfile", req.dockerfile,
        *optional("--port", req.svc_port),
    ]


def svc_show_args(req: SvcShowRequest) -> List[str]:
    return ["svc", "show", "--app", req.app_name, "--name", req.name, "--json"]


def svc_status_args(req: SvcStatusRequest) -> List[str]:
    return [
        "svc", "status",
        "--app", req.app_name,
        "--name", req.name,
        "--env", req.env_name,
        "--json",
    ]


def svc_delete_args(name: str) -> List[str]:
    return ["svc", "delete", "--name", name, "--yes"]


def svc_deploy_args(req: SvcDeployInput) -> List[str]:
    return [
        "svc", "deploy",
        "--name", req.name,
        "--env", req.env_name,
        *optional("--tag", req.image_tag),
    ]


def svc_list_args(app_name: str) -> List[str]:
    return ["svc", "ls", "--app", app_name, "--json"]


def svc_logs_args(req: SvcLogsRequest) -> List[str]:
    return [
        "svc", "logs",
        "--app", req.app_name,
        "--name", req.name,
        "--env", req.env_name,
        *optional("--since", req.since),
        "--json",
    ]


# ─── Tasks ────────────────────────────────────────────────────────────────────

def task_run_args(req: TaskRunInput) -> List[str]:
    return [
        "task", "run",
        "-n", req.group_name,
        *optional("--dockerfile", req.dockerfile),
        *optional("--image", req.image),
        *optional("--app", req.app_name),
        *optional("--env", req.env),
        *listed("--subnets", req.subnets),
        *listed("--security-groups", req.security_groups),
        *optional("--command", req.command),
        *pairs("--env-vars", req.env_vars),
        *switch("--default", req.default),
        *switch("--follow", req.follow),
    ]
