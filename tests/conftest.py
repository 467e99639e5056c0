from __future__ import annotations

import os
from collections.abc import Mapping

import pytest
from hypothesis import HealthCheck, settings

from deployment_inspector.domain import Deployment, JobSpec, Pod
from deployment_inspector.errors import JobSubmissionError


settings.register_profile(
    "ci_smoke",
    max_examples=30,
    derandomize=True,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)
settings.register_profile(
    "nightly_deep",
    max_examples=300,
    derandomize=True,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci_smoke"))


class FakeCluster:
    """In-memory read/write capability used in place of a live cluster."""

    def __init__(
        self,
        deployments: list[Deployment] | None = None,
        pods: Mapping[str, list[tuple[dict[str, str], Pod]]] | None = None,
        *,
        fail_nodes: set[str] | None = None,
        read_error: Exception | None = None,
        list_error: Exception | None = None,
    ) -> None:
        self.deployments = {(d.namespace, d.name): d for d in deployments or []}
        self.pods = dict(pods or {})
        self.fail_nodes = set(fail_nodes or ())
        self.read_error = read_error
        self.list_error = list_error
        self.created: list[tuple[str, JobSpec]] = []
        self.list_calls: list[tuple[str, dict[str, str]]] = []

    def get_deployment(self, name: str, namespace: str) -> Deployment | None:
        if self.read_error is not None:
            raise self.read_error
        return self.deployments.get((namespace, name))

    def list_pods(self, namespace: str, selector: Mapping[str, str]) -> list[Pod]:
        self.list_calls.append((namespace, dict(selector)))
        if self.list_error is not None:
            raise self.list_error
        return [
            pod
            for labels, pod in self.pods.get(namespace, [])
            if all(labels.get(key) == value for key, value in selector.items())
        ]

    def create_job(self, namespace: str, spec: JobSpec) -> None:
        node = next(iter(spec.node_selector.values()))
        if node in self.fail_nodes:
            raise JobSubmissionError(job_name=spec.instance_name, detail="node unreachable")
        self.created.append((namespace, spec))


@pytest.fixture()
def web_cluster() -> FakeCluster:
    labels = {"app": "web"}
    return FakeCluster(
        deployments=[
            Deployment(name="web", namespace="default", match_labels=labels),
            Deployment(name="idle", namespace="default", match_labels={"app": "idle"}),
        ],
        pods={
            "default": [
                (labels, Pod(name="web-1", node_name="node-b.example.com", phase="Running")),
                (labels, Pod(name="web-2", node_name="node-a.example.com", phase="Running")),
                (labels, Pod(name="web-3", node_name="node-b.example.com", phase="Running")),
                (labels, Pod(name="web-4", node_name=None, phase="Pending")),
                ({"app": "other"}, Pod(name="other-1", node_name="node-c", phase="Running")),
            ]
        },
    )
