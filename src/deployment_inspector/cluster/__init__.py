from __future__ import annotations

from deployment_inspector.cluster.capabilities import ClusterReader, JobWriter
from deployment_inspector.cluster.query import ClusterQueryService, nodes_for_pods

__all__ = [
    "ClusterQueryService",
    "ClusterReader",
    "JobWriter",
    "nodes_for_pods",
]
