"""
Copilot Bridge — Pydantic request models.
One model per copilot operation. Empty strings, False and empty collections
mean "omit the flag".
"""
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

Required = Annotated[str, Field(min_length=1)]
NonEmptyList = Annotated[List[str], Field(min_length=1)]


class Request(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AppInitRequest(Request):
    app_name: Required
    domain: str = ""
    tags: Dict[str, str] = Field(default_factory=dict)


class InitRequest(Request):
    """copilot init: app + first workload in one go."""
    app_name: Required
    workload_name: Required
    workload_type: Required
    dockerfile: Required
    image_tag: str = ""
    svc_port: str = ""
    deploy: bool = False


# ─── Environment network groups ───────────────────────────────────────────────

class VPCImport(Request):
    """Reuse an existing VPC. Every field is required."""
    kind: Literal["import"] = "import"
    vpc_id: Required
    public_subnet_ids: NonEmptyList
    private_subnet_ids: NonEmptyList


class VPCOverride(Request):
    """Let copilot create the VPC with these CIDRs. Every field is required."""
    kind: Literal["override"] = "override"
    cidr: Required
    public_subnet_cidrs: NonEmptyList
    private_subnet_cidrs: NonEmptyList


Network = Annotated[Union[VPCImport, VPCOverride], Field(discriminator="kind")]


class EnvInitRequest(Request):
    app_name: Required
    env_name: Required
    profile: Required
    prod: bool = False
    customized_env: bool = False
    network: Optional[Network] = None  # None = neither import nor override


class EnvShowRequest(Request):
    app_name: Required
    env_name: Required


# ─── Services ─────────────────────────────────────────────────────────────────

class SvcInitRequest(Request):
    name: Required
    svc_type: Required
    dockerfile: Required
    svc_port: str = ""


class SvcShowRequest(Request):
    app_name: Required
    name: Required


class SvcStatusRequest(Request):
    app_name: Required
    name: Required
    env_name: Required


class SvcLogsRequest(Request):
    app_name: Required
    name: Required
    env_name: Required
    since: str = ""


class SvcDeployInput(Request):
    name: Required
    env_name: Required
    image_tag: str = ""


# ─── Tasks ────────────────────────────────────────────────────────────────────

class TaskRunInput(Request):
    group_name: Required

    image: str = ""
    dockerfile: str = ""

    app_name: str = ""
    env: str = ""
    subnets: List[str] = Field(default_factory=list)
    security_groups: List[str] = Field(default_factory=list)

    command: str = ""
    env_vars: Dict[str, str] = Field(default_factory=dict)

    default: bool = False
    follow: bool = False

    @model_validator(mode="after")
    def validate_image_source(self) -> "TaskRunInput":
        if bool(self.image) == bool(self.dockerfile):
            raise ValueError("exactly one of image or dockerfile is required")
        return self
