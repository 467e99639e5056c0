from __future__ import annotations

import importlib

import pytest


def test_package_init_lazy_attrs_and_dir() -> None:
    di = importlib.reload(importlib.import_module("deployment_inspector"))
    di.__dict__.pop("tolerations", None)

    # Submodule lazy path.
    assert di.tolerations is not None

    # Attribute lazy path.
    assert callable(di.parse_tolerations)
    assert di.JobDispatcher.__name__ == "JobDispatcher"

    exported = dir(di)
    assert "parse_tolerations" in exported
    assert "tolerations" in exported


def test_package_init_unknown_attr_raises() -> None:
    di = importlib.reload(importlib.import_module("deployment_inspector"))
    with pytest.raises(AttributeError):
        _ = di.not_a_real_attr


def test_package_exports_core_surface() -> None:
    di = importlib.import_module("deployment_inspector")
    required = {
        "ClusterQueryService",
        "JobDispatcher",
        "DispatchReport",
        "parse_tolerations",
        "nodes_for_pods",
    }
    assert required.issubset(set(di.__all__))
