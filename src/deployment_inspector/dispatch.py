from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence

from deployment_inspector.cluster.capabilities import JobWriter
from deployment_inspector.config.models import DispatchConfig
from deployment_inspector.domain import JobSpec
from deployment_inspector.report import DispatchFailure, DispatchReport
from deployment_inspector.tolerations import Toleration

LOGGER = logging.getLogger(__name__)

_CANCELLED_ERROR_TYPE = "DispatchCancelled"


def sanitize_node_name(node: str) -> str:
    return node.replace(".", "-")


def job_instance_name(base_name: str, node: str, index: int) -> str:
    return f"{base_name}-{sanitize_node_name(node)}-{index}"


def build_job_spec(
    base_name: str,
    node: str,
    index: int,
    *,
    namespace: str,
    image: str,
    command: Sequence[str],
    tolerations: Sequence[Toleration] = (),
    options: DispatchConfig | None = None,
) -> JobSpec:
    opts = options or DispatchConfig()
    instance_name = job_instance_name(base_name, node, index)
    return JobSpec(
        instance_name=instance_name,
        namespace=namespace,
        image=image,
        command=tuple(command),
        node_selector={opts.hostname_label: node},
        tolerations=tuple(tolerations),
        ttl_seconds_after_finished=opts.ttl_seconds_after_finished,
        labels={opts.job_name_label: instance_name},
        container_name=opts.container_name,
        restart_policy=opts.restart_policy,
    )


class JobDispatcher:
    """Creates one job per node, pinned to that node by hostname selector.

    Submissions run sequentially in sorted node order. A failed submission is
    recorded in the report and the loop moves on to the next node; ``dispatch``
    itself does not raise for per-node failures.
    """

    def __init__(self, writer: JobWriter, options: DispatchConfig | None = None) -> None:
        self._writer = writer
        self._options = options or DispatchConfig()

    @property
    def options(self) -> DispatchConfig:
        return self._options

    def dispatch(
        self,
        base_name: str,
        nodes: Iterable[str],
        namespace: str,
        image: str | None = None,
        command: Sequence[str] | None = None,
        tolerations: Sequence[Toleration] = (),
        *,
        cancel_event: threading.Event | None = None,
    ) -> DispatchReport:
        ordered_nodes = tuple(sorted(set(nodes)))
        job_image = image or self._options.image
        job_command = tuple(command) if command else self._options.default_command

        created: list[str] = []
        failures: list[DispatchFailure] = []

        for index, node in enumerate(ordered_nodes):
            if cancel_event is not None and cancel_event.is_set():
                remaining = ordered_nodes[index:]
                LOGGER.warning(
                    "Dispatch of %s cancelled; skipping %d remaining nodes.",
                    base_name,
                    len(remaining),
                )
                failures.extend(
                    DispatchFailure(
                        node=skipped,
                        cause="dispatch cancelled before submission",
                        instance_name=job_instance_name(base_name, skipped, index + offset),
                        error_type=_CANCELLED_ERROR_TYPE,
                    )
                    for offset, skipped in enumerate(remaining)
                )
                break

            instance_name = job_instance_name(base_name, node, index)
            try:
                spec = build_job_spec(
                    base_name,
                    node,
                    index,
                    namespace=namespace,
                    image=job_image,
                    command=job_command,
                    tolerations=tolerations,
                    options=self._options,
                )
                self._writer.create_job(namespace, spec)
            except Exception as exc:
                LOGGER.warning("Failed to create job %s on node %s: %s", instance_name, node, exc)
                failures.append(
                    DispatchFailure(
                        node=node,
                        cause=str(exc),
                        instance_name=instance_name,
                        error_type=exc.__class__.__name__,
                    )
                )
                continue

            LOGGER.info("Created job %s on node %s.", instance_name, node)
            created.append(instance_name)

        return DispatchReport(
            requested=len(ordered_nodes),
            created=tuple(created),
            failures=tuple(failures),
        )


__all__ = [
    "JobDispatcher",
    "build_job_spec",
    "job_instance_name",
    "sanitize_node_name",
]
