from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from deployment_inspector.domain import Deployment, JobSpec, Pod


class ClusterReader(Protocol):
    """Read access to deployments and pods.

    ``get_deployment`` returns ``None`` when the deployment does not exist and
    raises for every other failure.
    """

    def get_deployment(self, name: str, namespace: str) -> Deployment | None:
        ...

    def list_pods(self, namespace: str, selector: Mapping[str, str]) -> Sequence[Pod]:
        ...


class JobWriter(Protocol):
    """Write access for job creation. Raises on failure."""

    def create_job(self, namespace: str, spec: JobSpec) -> None:
        ...


__all__ = ["ClusterReader", "JobWriter"]
