from __future__ import annotations

from deployment_inspector.config.loaders import load_inspector_config
from deployment_inspector.config.models import (
    DEFAULT_COMMAND,
    DEFAULT_IMAGE,
    DEFAULT_TTL_SECONDS_AFTER_FINISHED,
    HOSTNAME_LABEL,
    ClusterConfig,
    DispatchConfig,
    InspectorConfig,
)

__all__ = [
    "DEFAULT_COMMAND",
    "DEFAULT_IMAGE",
    "DEFAULT_TTL_SECONDS_AFTER_FINISHED",
    "HOSTNAME_LABEL",
    "ClusterConfig",
    "DispatchConfig",
    "InspectorConfig",
    "load_inspector_config",
]
