from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

DispatchOutcome = Literal["empty", "success", "partial", "failed"]


@dataclass(frozen=True, slots=True)
class DispatchFailure:
    node: str
    cause: str
    instance_name: str | None = None
    error_type: str = "Exception"

    def to_dict(self) -> dict[str, Any]:
        return {
            "node": self.node,
            "cause": self.cause,
            "instance_name": self.instance_name,
            "error_type": self.error_type,
        }


@dataclass(frozen=True, slots=True)
class DispatchReport:
    """Result of one fan-out dispatch.

    ``created`` holds job names in submission order. Every requested node ends
    up in exactly one of ``created`` or ``failures``.
    """

    requested: int
    created: tuple[str, ...] = ()
    failures: tuple[DispatchFailure, ...] = ()

    @property
    def outcome(self) -> DispatchOutcome:
        if self.requested == 0:
            return "empty"
        if not self.failures:
            return "success"
        if self.created:
            return "partial"
        return "failed"

    @property
    def all_failed(self) -> bool:
        return self.outcome == "failed"

    def failed_nodes(self) -> tuple[str, ...]:
        return tuple(failure.node for failure in self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "requested": int(self.requested),
            "created": list(self.created),
            "failures": [failure.to_dict() for failure in self.failures],
            "outcome": self.outcome,
        }


__all__ = ["DispatchFailure", "DispatchOutcome", "DispatchReport"]
