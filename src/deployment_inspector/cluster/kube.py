from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from deployment_inspector.domain import Deployment, JobSpec, Pod, format_label_selector
from deployment_inspector.errors import ConfigValidationError, JobSubmissionError

LOGGER = logging.getLogger(__name__)

_HTTP_NOT_FOUND = 404
_HTTP_CONFLICT = 409


def load_api_client(kubeconfig: str | Path | None = None) -> client.ApiClient:
    try:
        config.load_incluster_config()
        LOGGER.info("Using in-cluster Kubernetes configuration.")
        return client.ApiClient()
    except ConfigException:
        LOGGER.debug("Not running in a cluster; loading kubeconfig.")
    try:
        config.load_kube_config(config_file=str(kubeconfig) if kubeconfig else None)
    except (ConfigException, OSError) as exc:
        raise ConfigValidationError(f"cannot load Kubernetes configuration: {exc}") from exc
    return client.ApiClient()


def pod_from_api(pod: Any) -> Pod:
    spec = getattr(pod, "spec", None)
    status = getattr(pod, "status", None)
    return Pod(
        name=pod.metadata.name,
        node_name=getattr(spec, "node_name", None) or None,
        phase=getattr(status, "phase", None),
    )


def deployment_from_api(deployment: Any) -> Deployment:
    selector = getattr(deployment.spec, "selector", None)
    match_labels = getattr(selector, "match_labels", None) or {}
    if getattr(selector, "match_expressions", None):
        LOGGER.warning(
            "Deployment %s/%s selector uses matchExpressions, which are ignored; "
            "pods are resolved from matchLabels only.",
            deployment.metadata.namespace,
            deployment.metadata.name,
        )
    return Deployment(
        name=deployment.metadata.name,
        namespace=deployment.metadata.namespace,
        match_labels=dict(match_labels),
    )


class KubernetesCluster:
    """Read and write capabilities backed by the official Kubernetes client."""

    def __init__(
        self,
        apps_api: client.AppsV1Api,
        core_api: client.CoreV1Api,
        batch_api: client.BatchV1Api,
        *,
        request_timeout: float | None = None,
    ) -> None:
        self._apps = apps_api
        self._core = core_api
        self._batch = batch_api
        self._request_timeout = request_timeout

    @classmethod
    def from_kubeconfig(
        cls,
        kubeconfig: str | Path | None = None,
        *,
        request_timeout: float | None = None,
    ) -> "KubernetesCluster":
        api_client = load_api_client(kubeconfig)
        return cls(
            client.AppsV1Api(api_client),
            client.CoreV1Api(api_client),
            client.BatchV1Api(api_client),
            request_timeout=request_timeout,
        )

    def _request_kwargs(self) -> dict[str, Any]:
        if self._request_timeout is None:
            return {}
        return {"_request_timeout": self._request_timeout}

    def get_deployment(self, name: str, namespace: str) -> Deployment | None:
        try:
            deployment = self._apps.read_namespaced_deployment(
                name=name,
                namespace=namespace,
                **self._request_kwargs(),
            )
        except ApiException as exc:
            if exc.status == _HTTP_NOT_FOUND:
                return None
            raise
        return deployment_from_api(deployment)

    def list_pods(self, namespace: str, selector: Mapping[str, str]) -> list[Pod]:
        pod_list = self._core.list_namespaced_pod(
            namespace=namespace,
            label_selector=format_label_selector(selector),
            **self._request_kwargs(),
        )
        return [pod_from_api(pod) for pod in pod_list.items]

    def create_job(self, namespace: str, spec: JobSpec) -> None:
        try:
            self._batch.create_namespaced_job(
                namespace=namespace,
                body=spec.to_manifest(),
                **self._request_kwargs(),
            )
        except ApiException as exc:
            raise JobSubmissionError(
                job_name=spec.instance_name,
                detail=f"{exc.status} {exc.reason}",
                already_exists=exc.status == _HTTP_CONFLICT,
            ) from exc


__all__ = [
    "KubernetesCluster",
    "deployment_from_api",
    "load_api_client",
    "pod_from_api",
]
