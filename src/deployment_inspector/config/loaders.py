from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from deployment_inspector.config.models import InspectorConfig
from deployment_inspector.errors import ConfigValidationError

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigValidationError(f"cannot read config file '{path}': {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigValidationError(f"invalid TOML in '{path}': {exc}") from exc


def load_inspector_config(path: str | Path | None = None) -> InspectorConfig:
    if path is None:
        return InspectorConfig()
    config_path = Path(path).expanduser().resolve()
    raw = _read_toml(config_path)
    try:
        config = InspectorConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigValidationError(
            f"invalid inspector config '{config_path}': {exc}"
        ) from exc
    return _resolve_config_paths(config, config_path.parent)


def _resolve_config_paths(config: InspectorConfig, base_dir: Path) -> InspectorConfig:
    kubeconfig = config.cluster.kubeconfig
    if kubeconfig is None or kubeconfig.is_absolute():
        return config
    resolved = config.cluster.model_copy(update={"kubeconfig": (base_dir / kubeconfig).resolve()})
    return config.model_copy(update={"cluster": resolved})
