"""Toleration text parsing.

Two grammars are accepted and selected by the first non-whitespace character:

* JSON: an array of objects with ``key``, ``operator``, ``value``, ``effect``
  and optionally ``tolerationSeconds``, matching the Kubernetes wire shape.
* Compact: comma-separated ``key:Effect`` (operator ``Exists``) or
  ``key=value:Effect`` (operator ``Equal``) entries.

Both paths feed the same validation step, so effect and operator rules are
enforced identically. Effects are matched case-insensitively and stored in
their canonical spelling.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deployment_inspector.errors import ParseErrorKind, TolerationParseError


class TolerationOperator(str, Enum):
    EXISTS = "Exists"
    EQUAL = "Equal"


class TolerationEffect(str, Enum):
    NO_SCHEDULE = "NoSchedule"
    PREFER_NO_SCHEDULE = "PreferNoSchedule"
    NO_EXECUTE = "NoExecute"


_EFFECTS_BY_FOLDED_NAME: dict[str, TolerationEffect] = {
    effect.value.casefold(): effect for effect in TolerationEffect
}
_OPERATORS_BY_NAME: dict[str, TolerationOperator] = {
    operator.value: operator for operator in TolerationOperator
}
_JSON_LEADING_CHARS = ("[", "{")
_MAX_TOLERATION_SECONDS = 2**63 - 1


@dataclass(frozen=True, slots=True)
class Toleration:
    key: str
    operator: TolerationOperator
    effect: TolerationEffect
    value: str = ""
    toleration_seconds: int | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "key": self.key,
            "operator": self.operator.value,
            "effect": self.effect.value,
        }
        if self.operator is TolerationOperator.EQUAL:
            payload["value"] = self.value
        if self.toleration_seconds is not None:
            payload["tolerationSeconds"] = self.toleration_seconds
        return payload

    def to_compact(self) -> str:
        # tolerationSeconds has no compact spelling and is not rendered.
        if self.operator is TolerationOperator.EQUAL:
            return f"{self.key}={self.value}:{self.effect.value}"
        return f"{self.key}:{self.effect.value}"


class _TolerationPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    key: str = ""
    operator: str = TolerationOperator.EQUAL.value
    value: str = ""
    effect: str = ""
    toleration_seconds: int | None = Field(
        default=None,
        alias="tolerationSeconds",
        ge=0,
        le=_MAX_TOLERATION_SECONDS,
    )


def normalize_effect(token: str) -> TolerationEffect:
    effect = _EFFECTS_BY_FOLDED_NAME.get(token.strip().casefold())
    if effect is None:
        raise TolerationParseError(
            kind=ParseErrorKind.UNKNOWN_EFFECT,
            detail="effect must be one of NoSchedule, PreferNoSchedule, NoExecute",
            got=token,
        )
    return effect


def _build_toleration(
    *,
    key: str,
    operator: str,
    value: str,
    effect: str,
    toleration_seconds: int | None = None,
) -> Toleration:
    resolved_operator = _OPERATORS_BY_NAME.get(operator)
    if resolved_operator is None:
        raise TolerationParseError(
            kind=ParseErrorKind.INVALID_TOLERATION,
            detail="operator must be Exists or Equal",
            got=operator,
        )
    resolved_effect = normalize_effect(effect)

    if resolved_operator is TolerationOperator.EXISTS and value:
        raise TolerationParseError(
            kind=ParseErrorKind.INVALID_TOLERATION,
            detail=f"operator Exists must not carry a value (key '{key}')",
            got=value,
        )
    if resolved_operator is TolerationOperator.EQUAL and (not key or not value):
        raise TolerationParseError(
            kind=ParseErrorKind.INVALID_TOLERATION,
            detail="operator Equal requires both a key and a value",
            got=f"{key}={value}",
        )
    if toleration_seconds is not None and resolved_effect is not TolerationEffect.NO_EXECUTE:
        raise TolerationParseError(
            kind=ParseErrorKind.INVALID_TOLERATION,
            detail="tolerationSeconds is only valid with effect NoExecute",
            got=resolved_effect.value,
        )

    return Toleration(
        key=key,
        operator=resolved_operator,
        effect=resolved_effect,
        value=value,
        toleration_seconds=toleration_seconds,
    )


def _parse_json(text: str) -> tuple[Toleration, ...]:
    try:
        raw = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # Oversized integer literals raise a plain ValueError, deep nesting a RecursionError.
        raise TolerationParseError(
            kind=ParseErrorKind.MALFORMED_JSON,
            detail=f"cannot decode JSON: {exc}",
        ) from exc
    if not isinstance(raw, list):
        raise TolerationParseError(
            kind=ParseErrorKind.MALFORMED_JSON,
            detail="tolerations JSON must be an array of objects",
        )

    tolerations: list[Toleration] = []
    for index, item in enumerate(raw):
        try:
            payload = _TolerationPayload.model_validate(item)
        except ValidationError as exc:
            raise TolerationParseError(
                kind=ParseErrorKind.MALFORMED_JSON,
                detail=f"toleration #{index} is not a valid toleration object: {exc}",
            ) from exc
        tolerations.append(
            _build_toleration(
                key=payload.key,
                operator=payload.operator,
                value=payload.value,
                effect=payload.effect,
                toleration_seconds=payload.toleration_seconds,
            )
        )
    return tuple(tolerations)


def _parse_compact_entry(entry: str) -> Toleration:
    separators = entry.count(":")
    if separators != 1:
        detail = (
            "expected 'key[=value]:effect'"
            if separators == 0
            else "expected exactly one ':' between key[=value] and effect"
        )
        raise TolerationParseError(
            kind=ParseErrorKind.MISSING_EFFECT_SEPARATOR,
            detail=detail,
            got=entry,
        )
    key_part, effect = entry.split(":")
    key, has_value, value = key_part.partition("=")
    operator = TolerationOperator.EQUAL if has_value else TolerationOperator.EXISTS
    return _build_toleration(
        key=key.strip(),
        operator=operator.value,
        value=value.strip(),
        effect=effect,
    )


def _parse_compact(text: str) -> tuple[Toleration, ...]:
    return tuple(
        _parse_compact_entry(entry.strip())
        for entry in text.split(",")
        if entry.strip()
    )


def parse_tolerations(spec: str) -> tuple[Toleration, ...]:
    text = spec.strip()
    if not text:
        return ()
    if text.startswith(_JSON_LEADING_CHARS):
        return _parse_json(text)
    return _parse_compact(text)


def format_tolerations(tolerations: Iterable[Toleration]) -> str:
    return ",".join(toleration.to_compact() for toleration in tolerations)


__all__ = [
    "Toleration",
    "TolerationEffect",
    "TolerationOperator",
    "format_tolerations",
    "normalize_effect",
    "parse_tolerations",
]
