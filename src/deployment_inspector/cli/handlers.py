from __future__ import annotations

import argparse
import json
import logging

from deployment_inspector.cluster import ClusterQueryService
from deployment_inspector.cluster.kube import KubernetesCluster
from deployment_inspector.config import InspectorConfig, load_inspector_config
from deployment_inspector.dispatch import JobDispatcher
from deployment_inspector.errors import ConfigValidationError
from deployment_inspector.tolerations import format_tolerations, parse_tolerations

LOGGER = logging.getLogger(__name__)

_EXIT_OK = 0
_EXIT_DISPATCH = 5


def parse_command(text: str | None) -> tuple[str, ...]:
    if text is None or not text.strip():
        return ()
    return tuple(part.strip() for part in text.split(","))


def build_cluster(args: argparse.Namespace, cfg: InspectorConfig) -> KubernetesCluster:
    kubeconfig = args.kubeconfig or cfg.cluster.kubeconfig
    return KubernetesCluster.from_kubeconfig(
        kubeconfig,
        request_timeout=cfg.cluster.request_timeout_seconds,
    )


def _print_json(payload: dict[str, object]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def handle_list(args: argparse.Namespace) -> int:
    cfg = load_inspector_config(args.config)
    service = ClusterQueryService(build_cluster(args, cfg))
    pods = service.pods_for_deployment(args.deployment, args.namespace)
    nodes = service.nodes_for_pods(pods)
    _print_json(
        {
            "deployment": args.deployment,
            "namespace": args.namespace,
            "pods": [pod.to_dict() for pod in pods],
            "nodes": list(nodes),
        }
    )
    return _EXIT_OK


def handle_run_job(args: argparse.Namespace) -> int:
    base_name = args.job_name.strip()
    if not base_name:
        raise ConfigValidationError("job name must be non-empty")
    cfg = load_inspector_config(args.config)
    tolerations = parse_tolerations(args.tolerations or "")
    command = parse_command(args.command)
    job_namespace = args.job_namespace or args.namespace

    cluster = build_cluster(args, cfg)
    service = ClusterQueryService(cluster)
    pods = service.pods_for_deployment(args.deployment, args.namespace)
    nodes = service.nodes_for_pods(pods)
    if not nodes:
        LOGGER.warning(
            "No scheduled pods for deployment %s/%s; no jobs created.",
            args.namespace,
            args.deployment,
        )

    dispatcher = JobDispatcher(cluster, cfg.dispatch)
    report = dispatcher.dispatch(
        base_name,
        nodes,
        job_namespace,
        image=args.image,
        command=command,
        tolerations=tolerations,
    )
    _print_json(
        {
            "deployment": args.deployment,
            "namespace": args.namespace,
            "job_namespace": job_namespace,
            "nodes": list(nodes),
            "tolerations": format_tolerations(tolerations),
            "report": report.to_dict(),
        }
    )
    return _EXIT_DISPATCH if report.all_failed else _EXIT_OK
