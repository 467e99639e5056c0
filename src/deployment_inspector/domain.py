from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from deployment_inspector.tolerations import Toleration

NodeSet = tuple[str, ...]


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Pod:
    name: str
    node_name: str | None = None
    phase: str | None = None

    @property
    def is_scheduled(self) -> bool:
        return bool(self.node_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "node": self.node_name or None,
            "phase": self.phase,
        }


@dataclass(frozen=True, slots=True)
class Deployment:
    name: str
    namespace: str
    match_labels: Mapping[str, str] = field(default_factory=_empty_mapping)


def format_label_selector(match_labels: Mapping[str, str]) -> str:
    return ",".join(f"{key}={match_labels[key]}" for key in sorted(match_labels))


@dataclass(frozen=True, slots=True)
class JobSpec:
    instance_name: str
    namespace: str
    image: str
    command: tuple[str, ...]
    node_selector: Mapping[str, str]
    tolerations: tuple[Toleration, ...] = ()
    ttl_seconds_after_finished: int = 300
    labels: Mapping[str, str] = field(default_factory=_empty_mapping)
    container_name: str = "job-container"
    restart_policy: str = "Never"

    def __post_init__(self) -> None:
        if not self.instance_name:
            raise ValueError("instance_name must be non-empty")
        if not self.command:
            raise ValueError("command must contain at least one element")
        if self.ttl_seconds_after_finished < 0:
            raise ValueError("ttl_seconds_after_finished must be >= 0")

    def to_manifest(self) -> dict[str, Any]:
        pod_spec: dict[str, Any] = {
            "restartPolicy": self.restart_policy,
            "nodeSelector": dict(self.node_selector),
            "containers": [
                {
                    "name": self.container_name,
                    "image": self.image,
                    "command": list(self.command),
                }
            ],
        }
        if self.tolerations:
            pod_spec["tolerations"] = [toleration.to_dict() for toleration in self.tolerations]
        return {
            "apiVersion": "batch/v1",
            "kind": "Job",
            "metadata": {"name": self.instance_name, "namespace": self.namespace},
            "spec": {
                "ttlSecondsAfterFinished": self.ttl_seconds_after_finished,
                "template": {
                    "metadata": {"labels": dict(self.labels)},
                    "spec": pod_spec,
                },
            },
        }


__all__ = [
    "Deployment",
    "JobSpec",
    "NodeSet",
    "Pod",
    "format_label_selector",
]
