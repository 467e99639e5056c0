from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from deployment_inspector.errors import TolerationParseError
from deployment_inspector.tolerations import (
    Toleration,
    TolerationEffect,
    TolerationOperator,
    format_tolerations,
    parse_tolerations,
)

_TOKEN = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789-./",
    min_size=1,
    max_size=20,
)
_EFFECT_SPELLINGS = st.sampled_from(list(TolerationEffect)).flatmap(
    lambda effect: st.sampled_from(
        [effect.value, effect.value.lower(), effect.value.upper()]
    ).map(lambda spelling: (effect, spelling))
)


@st.composite
def compact_entries(draw) -> tuple[Toleration, str]:
    key = draw(_TOKEN)
    effect, spelling = draw(_EFFECT_SPELLINGS)
    if draw(st.booleans()):
        value = draw(_TOKEN)
        return (
            Toleration(key=key, operator=TolerationOperator.EQUAL, effect=effect, value=value),
            f"{key}={value}:{spelling}",
        )
    return (
        Toleration(key=key, operator=TolerationOperator.EXISTS, effect=effect),
        f"{key}:{spelling}",
    )


@pytest.mark.fuzz
@given(entries=st.lists(compact_entries(), min_size=1, max_size=6))
def test_fuzz_compact_parse_matches_model(entries) -> None:
    expected = tuple(toleration for toleration, _ in entries)
    text = ",".join(spelling for _, spelling in entries)
    parsed = parse_tolerations(text)
    assert parsed == expected
    assert parse_tolerations(format_tolerations(parsed)) == parsed


@pytest.mark.fuzz
@given(spec=st.text(max_size=60))
def test_fuzz_parse_never_raises_unexpected(spec: str) -> None:
    try:
        result = parse_tolerations(spec)
    except TolerationParseError:
        return
    assert isinstance(result, tuple)
    assert all(isinstance(toleration, Toleration) for toleration in result)
