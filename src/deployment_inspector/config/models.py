from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_COMMAND: tuple[str, ...] = ("echo", "Job running on node")
DEFAULT_IMAGE = "busybox"
DEFAULT_TTL_SECONDS_AFTER_FINISHED = 300
HOSTNAME_LABEL = "kubernetes.io/hostname"


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


def _non_empty(value: str, name: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{name} must be non-empty")
    return cleaned


class ClusterConfig(StrictModel):
    kubeconfig: Path | None = None
    request_timeout_seconds: float | None = Field(default=None, gt=0)

    @field_validator("kubeconfig", mode="before")
    @classmethod
    def _coerce_kubeconfig(cls, value: object) -> Path | None:
        if value is None or isinstance(value, Path):
            return value
        if isinstance(value, str):
            return Path(value).expanduser()
        raise ValueError("cluster.kubeconfig must be a path-like string")

    @field_validator("request_timeout_seconds", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        return value


class DispatchConfig(StrictModel):
    image: str = DEFAULT_IMAGE
    default_command: tuple[str, ...] = DEFAULT_COMMAND
    ttl_seconds_after_finished: int = Field(default=DEFAULT_TTL_SECONDS_AFTER_FINISHED, ge=0)
    container_name: str = "job-container"
    restart_policy: Literal["Never", "OnFailure"] = "Never"
    hostname_label: str = HOSTNAME_LABEL
    job_name_label: str = "job-name"

    @field_validator("default_command", mode="before")
    @classmethod
    def _coerce_default_command(cls, value: object) -> object:
        if isinstance(value, list):
            return tuple(value)
        return value

    @field_validator("default_command")
    @classmethod
    def _validate_default_command(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("dispatch.default_command must contain at least one element")
        return value

    @field_validator("image", "container_name", "hostname_label", "job_name_label")
    @classmethod
    def _validate_non_empty(cls, value: str, info: ValidationInfo) -> str:
        return _non_empty(value, f"dispatch.{info.field_name}")


class InspectorConfig(StrictModel):
    cluster: ClusterConfig = Field(default_factory=ClusterConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
