"""
Copilot Bridge — JSON result shapes.
Typed views of what `copilot ... --json` prints. Unknown keys are ignored;
missing required keys or malformed JSON raise DecodeError.
"""
from datetime import datetime
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import DecodeError


class Output(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# ─── Applications ─────────────────────────────────────────────────────────────

class AppShowOutput(Output):
    name: str
    uri: str


# ─── Environments ─────────────────────────────────────────────────────────────

class EnvDescription(Output):
    name: str
    app: str = ""
    region: str = ""
    account: str = Field("", alias="accountID")
    prod: bool = False
    registry_url: str = Field("", alias="registryURL")
    execution_role: str = Field("", alias="executionRoleARN")
    manager_role: str = Field("", alias="managerRoleARN")


class EnvShowServices(Output):
    name: str
    type: str = ""


class EnvShowOutput(Output):
    environment: EnvDescription
    services: List[EnvShowServices] = Field(default_factory=list)
    tags: Dict[str, str] = Field(default_factory=dict)
    resources: List[Dict[str, str]] = Field(default_factory=list)


class EnvListOutput(Output):
    envs: List[EnvDescription] = Field(alias="environments")


# ─── Services ─────────────────────────────────────────────────────────────────

class SvcShowConfigurations(Output):
    environment: str
    port: str = ""
    tasks: str = ""
    cpu: str = ""
    memory: str = ""


class SvcShowRoutes(Output):
    environment: str
    url: str = ""


class SvcShowServiceDiscovery(Output):
    environment: List[str] = Field(default_factory=list)
    namespace: str = ""


class SvcShowVariables(Output):
    environment: str
    name: str
    value: str = ""
    container: str = ""


class SvcShowResource(Output):
    type: str
    physical_id: str = Field("", alias="physicalID")


class SvcShowOutput(Output):
    name: str = Field(alias="service")
    type: str = ""
    app: str = Field("", alias="application")
    configurations: List[SvcShowConfigurations] = Field(default_factory=list)
    routes: List[SvcShowRoutes] = Field(default_factory=list)
    service_discovery: List[SvcShowServiceDiscovery] = Field(default_factory=list, alias="serviceDiscovery")
    variables: List[SvcShowVariables] = Field(default_factory=list)
    resources: Dict[str, List[SvcShowResource]] = Field(default_factory=dict)


class Image(Output):
    id: str = Field("", alias="ID")
    digest: str = Field("", alias="Digest")


class SvcStatusServiceInfo(Output):
    desired_count: int = Field(0, alias="desiredCount")
    running_count: int = Field(0, alias="runningCount")
    status: str = ""
    last_deployment_at: Optional[datetime] = Field(None, alias="lastDeploymentAt")
    task_definition: str = Field("", alias="taskDefinition")


class SvcStatusTaskInfo(Output):
    id: str
    health: str = ""
    images: List[Image] = Field(default_factory=list)
    last_status: str = Field("", alias="lastStatus")
    started_at: Optional[datetime] = Field(None, alias="startedAt")
    stopped_at: Optional[datetime] = Field(None, alias="stoppedAt")
    stopped_reason: str = Field("", alias="stoppedReason")


class SvcStatusAlarmInfo(Output):
    name: str
    status: str = ""
    reason: str = ""
    type: str = ""


class SvcStatusOutput(Output):
    name: str
    status: str
    service: Optional[SvcStatusServiceInfo] = None
    tasks: List[SvcStatusTaskInfo] = Field(default_factory=list)
    alarms: List[SvcStatusAlarmInfo] = Field(default_factory=list)


class WorkloadDescription(Output):
    name: str
    type: str = ""
    app: str = ""


class SvcListOutput(Output):
    services: List[WorkloadDescription]


class SvcLogsOutput(Output):
    log_stream_name: str = Field("", alias="logStreamName")
    ingestion_time: int = Field(0, alias="ingestionTime")
    timestamp: int = 0
    message: str


# ─── Decoders ─────────────────────────────────────────────────────────────────

M = TypeVar("M", bound=Output)


def decode(model: Type[M], payload: bytes, shape: Optional[str] = None) -> M:
    try:
        return model.model_validate_json(payload)
    except ValidationError as e:
        raise DecodeError(shape or model.__name__, payload, e.errors(include_url=False)) from e


def decode_app_show(payload: bytes) -> AppShowOutput:
    return decode(AppShowOutput, payload)


def decode_env_show(payload: bytes) -> EnvShowOutput:
    return decode(EnvShowOutput, payload)


def decode_env_list(payload: bytes) -> EnvListOutput:
    return decode(EnvListOutput, payload)


def decode_svc_show(payload: bytes) -> SvcShowOutput:
    return decode(SvcShowOutput, payload)


def decode_svc_status(payload: bytes) -> SvcStatusOutput:
    return decode(SvcStatusOutput, payload)


def decode_svc_list(payload: bytes) -> SvcListOutput:
    return decode(SvcListOutput, payload)


def decode_svc_logs(payload: bytes) -> List[SvcLogsOutput]:
    """svc logs --json prints one object per line; keep them in that order."""
    entries = []
    for lineno, line in enumerate(payload.splitlines(), start=1):
        if not line.strip():
            continue
        entries.append(decode(SvcLogsOutput, line, shape=f"SvcLogsOutput (line {lineno})"))
    return entries
