from __future__ import annotations

from importlib import import_module

from deployment_inspector.__about__ import __version__

__all__ = [
    "ClusterQueryService",
    "DispatchFailure",
    "DispatchReport",
    "InspectorConfig",
    "JobDispatcher",
    "JobSpec",
    "KubernetesCluster",
    "Pod",
    "Toleration",
    "format_tolerations",
    "load_inspector_config",
    "nodes_for_pods",
    "parse_tolerations",
    "__version__",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ClusterQueryService": ("deployment_inspector.cluster", "ClusterQueryService"),
    "nodes_for_pods": ("deployment_inspector.cluster", "nodes_for_pods"),
    "KubernetesCluster": ("deployment_inspector.cluster.kube", "KubernetesCluster"),
    "InspectorConfig": ("deployment_inspector.config", "InspectorConfig"),
    "load_inspector_config": ("deployment_inspector.config", "load_inspector_config"),
    "JobDispatcher": ("deployment_inspector.dispatch", "JobDispatcher"),
    "JobSpec": ("deployment_inspector.domain", "JobSpec"),
    "Pod": ("deployment_inspector.domain", "Pod"),
    "DispatchFailure": ("deployment_inspector.report", "DispatchFailure"),
    "DispatchReport": ("deployment_inspector.report", "DispatchReport"),
    "Toleration": ("deployment_inspector.tolerations", "Toleration"),
    "format_tolerations": ("deployment_inspector.tolerations", "format_tolerations"),
    "parse_tolerations": ("deployment_inspector.tolerations", "parse_tolerations"),
}

_SUBMODULES = {
    "cluster",
    "config",
    "dispatch",
    "domain",
    "errors",
    "report",
    "tolerations",
}


def __getattr__(name: str) -> object:
    if name in _SUBMODULES:
        module = import_module(f"deployment_inspector.{name}")
        globals()[name] = module
        return module

    target = _LAZY_IMPORTS.get(name)
    if target is None:
        raise AttributeError(f"module 'deployment_inspector' has no attribute '{name}'")
    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))
