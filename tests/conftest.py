from __future__ import annotations

from datetime import date
from itertools import count
from typing import Any, Callable

import pytest

from scout_dashboard.models import AttributeSet, PlayerRecord

_ids = count(1)


def _attrs(**scores: int) -> AttributeSet:
    base = {
        "pace": 50,
        "shooting": 50,
        "passing": 50,
        "dribbling": 50,
        "defending": 50,
        "physical": 50,
    }
    base.update(scores)
    return AttributeSet(**base)


@pytest.fixture
def make_player() -> Callable[..., PlayerRecord]:
    """Factory for PlayerRecord with every optional field unset by default."""

    def _make(**fields: Any) -> PlayerRecord:
        pid = next(_ids)
        fields.setdefault("id", pid)
        fields.setdefault("name", f"Player {pid}")
        return PlayerRecord(**fields)

    return _make


@pytest.fixture
def make_attrs() -> Callable[..., AttributeSet]:
    return _attrs


@pytest.fixture
def today() -> date:
    return date(2026, 1, 15)
