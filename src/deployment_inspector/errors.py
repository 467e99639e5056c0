from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeploymentInspectorError(Exception):
    """Base exception for config, parsing, query, and submission failures."""


class ConfigValidationError(DeploymentInspectorError):
    """Raised when inspector configuration or CLI input is invalid."""


class ParseErrorKind(str, Enum):
    MALFORMED_JSON = "malformed_json"
    MISSING_EFFECT_SEPARATOR = "missing_effect_separator"
    UNKNOWN_EFFECT = "unknown_effect"
    INVALID_TOLERATION = "invalid_toleration"


class QueryErrorKind(str, Enum):
    DEPLOYMENT_NOT_FOUND = "deployment_not_found"
    LIST_FAILED = "list_failed"


@dataclass(slots=True)
class TolerationParseError(DeploymentInspectorError):
    """Raised when toleration text cannot be turned into tolerations."""

    kind: ParseErrorKind
    detail: str
    got: str | None = None

    def __str__(self) -> str:
        if self.got is not None:
            return f"invalid tolerations ({self.kind.value}): {self.detail}: '{self.got}'"
        return f"invalid tolerations ({self.kind.value}): {self.detail}"


@dataclass(slots=True)
class ClusterQueryError(DeploymentInspectorError):
    """Raised when a deployment cannot be resolved to its pods."""

    kind: QueryErrorKind
    deployment: str
    namespace: str
    detail: str = ""

    def __str__(self) -> str:
        if self.kind is QueryErrorKind.DEPLOYMENT_NOT_FOUND:
            return f"deployment '{self.deployment}' not found in namespace '{self.namespace}'"
        return (
            f"failed to list pods for deployment '{self.deployment}' "
            f"in namespace '{self.namespace}': {self.detail}"
        )


@dataclass(slots=True)
class JobSubmissionError(DeploymentInspectorError):
    """Raised by a write capability when a job cannot be created."""

    job_name: str
    detail: str
    already_exists: bool = False

    def __str__(self) -> str:
        if self.already_exists:
            return f"job '{self.job_name}' already exists"
        return f"failed to create job '{self.job_name}': {self.detail}"
