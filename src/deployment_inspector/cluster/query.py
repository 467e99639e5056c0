from __future__ import annotations

import logging
from collections.abc import Iterable

from deployment_inspector.cluster.capabilities import ClusterReader
from deployment_inspector.domain import NodeSet, Pod, format_label_selector
from deployment_inspector.errors import (
    ClusterQueryError,
    DeploymentInspectorError,
    QueryErrorKind,
)

LOGGER = logging.getLogger(__name__)


def nodes_for_pods(pods: Iterable[Pod]) -> NodeSet:
    return tuple(sorted({pod.node_name for pod in pods if pod.node_name}))


class ClusterQueryService:
    """Resolves a deployment to the pods it owns and the nodes they run on.

    Pods are found through the deployment's label selector, so a deployment
    whose selector matches nothing yields an empty result rather than an
    error.
    """

    def __init__(self, reader: ClusterReader) -> None:
        self._reader = reader

    def pods_for_deployment(self, name: str, namespace: str) -> tuple[Pod, ...]:
        try:
            deployment = self._reader.get_deployment(name, namespace)
        except DeploymentInspectorError:
            raise
        except Exception as exc:
            raise ClusterQueryError(
                kind=QueryErrorKind.LIST_FAILED,
                deployment=name,
                namespace=namespace,
                detail=f"cannot read deployment: {exc}",
            ) from exc
        if deployment is None:
            raise ClusterQueryError(
                kind=QueryErrorKind.DEPLOYMENT_NOT_FOUND,
                deployment=name,
                namespace=namespace,
            )

        if not deployment.match_labels:
            LOGGER.warning(
                "Deployment %s/%s has no match labels; no pods resolved.",
                namespace,
                name,
            )
            return ()

        try:
            pods = tuple(self._reader.list_pods(namespace, deployment.match_labels))
        except DeploymentInspectorError:
            raise
        except Exception as exc:
            raise ClusterQueryError(
                kind=QueryErrorKind.LIST_FAILED,
                deployment=name,
                namespace=namespace,
                detail=str(exc),
            ) from exc

        LOGGER.info(
            "Resolved %d pods for deployment %s/%s (selector %s).",
            len(pods),
            namespace,
            name,
            format_label_selector(deployment.match_labels),
        )
        return pods

    def nodes_for_pods(self, pods: Iterable[Pod]) -> NodeSet:
        return nodes_for_pods(pods)


__all__ = ["ClusterQueryService", "nodes_for_pods"]
