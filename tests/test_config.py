from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from deployment_inspector.config import (
    DEFAULT_COMMAND,
    ClusterConfig,
    DispatchConfig,
    InspectorConfig,
    load_inspector_config,
)
from deployment_inspector.errors import ConfigValidationError


def test_load_without_path_returns_defaults() -> None:
    cfg = load_inspector_config(None)
    assert cfg == InspectorConfig()
    assert cfg.dispatch.default_command == DEFAULT_COMMAND
    assert cfg.dispatch.ttl_seconds_after_finished == 300
    assert cfg.dispatch.hostname_label == "kubernetes.io/hostname"
    assert cfg.cluster.kubeconfig is None


def test_load_inspector_config_resolves_paths(tmp_path: Path) -> None:
    path = tmp_path / "inspector.toml"
    path.write_text(
        """
[cluster]
kubeconfig = "kube/config"
request_timeout_seconds = 15

[dispatch]
image = "alpine:3.20"
default_command = ["uname", "-a"]
ttl_seconds_after_finished = 120
restart_policy = "OnFailure"
""".strip(),
        encoding="utf-8",
    )
    cfg = load_inspector_config(path)
    assert cfg.cluster.kubeconfig == (tmp_path / "kube/config").resolve()
    assert cfg.cluster.request_timeout_seconds == 15.0
    assert cfg.dispatch.image == "alpine:3.20"
    assert cfg.dispatch.default_command == ("uname", "-a")
    assert cfg.dispatch.ttl_seconds_after_finished == 120
    assert cfg.dispatch.restart_policy == "OnFailure"


def test_load_inspector_config_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("[dispatch\nimage='x'", encoding="utf-8")
    with pytest.raises(ConfigValidationError):
        load_inspector_config(path)


def test_load_inspector_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigValidationError, match="cannot read config file"):
        load_inspector_config(tmp_path / "missing.toml")


def test_load_inspector_config_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "inspector.toml"
    path.write_text("[dispatch]\nreplicas = 3\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError, match="invalid inspector config"):
        load_inspector_config(path)


def test_dispatch_config_validation() -> None:
    with pytest.raises(ValidationError):
        DispatchConfig(default_command=())
    with pytest.raises(ValidationError):
        DispatchConfig(ttl_seconds_after_finished=-1)
    with pytest.raises(ValidationError):
        DispatchConfig(image="  ")
    with pytest.raises(ValidationError):
        DispatchConfig(restart_policy="Always")


def test_cluster_config_validation() -> None:
    with pytest.raises(ValidationError):
        ClusterConfig(request_timeout_seconds=0)
    with pytest.raises(ValidationError):
        ClusterConfig(kubeconfig=42)
