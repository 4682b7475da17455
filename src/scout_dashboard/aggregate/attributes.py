"""Per-position averages of the core technical attributes."""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from scout_dashboard.aggregate.frame import round_half_away
from scout_dashboard.models import (
    CORE_ATTRIBUTES,
    CoreAttributes,
    PlayerRecord,
    PositionAttributeSummary,
)


def _position_means(records: Sequence[PlayerRecord]) -> pd.DataFrame | None:
    """Return mean core scores and `player_count` per position, or None.

    Only records carrying both a position and an AttributeSet qualify.
    Positions appear in first-seen order.
    """
    rows = [
        {"position": r.position, **{a: getattr(r.attributes, a) for a in CORE_ATTRIBUTES}}
        for r in records
        if r.attributes is not None and r.position is not None
    ]
    if not rows:
        return None

    pdf = pd.DataFrame(rows, columns=["position", *CORE_ATTRIBUTES])
    grouped = pdf.groupby("position", sort=False)
    table = grouped[list(CORE_ATTRIBUTES)].mean()
    table["player_count"] = grouped.size()
    return table


def _core(row: pd.Series) -> CoreAttributes:
    return CoreAttributes(**{a: round_half_away(row[a]) for a in CORE_ATTRIBUTES})


def average_attributes(records: Sequence[PlayerRecord]) -> dict[str, CoreAttributes]:
    """Map each position to the unweighted mean of its players' core scores.

    Players without an AttributeSet are left out; a position none of whose
    players is rated does not appear at all.
    """
    table = _position_means(records)
    if table is None:
        return {}
    return {str(position): _core(row) for position, row in table.iterrows()}


def attributes_by_position_items(
    records: Sequence[PlayerRecord],
) -> list[PositionAttributeSummary]:
    """Same averages as `average_attributes`, as a list carrying player counts.

    This is the shape the attribute radar chart consumes.
    """
    table = _position_means(records)
    if table is None:
        return []
    return [
        PositionAttributeSummary(
            position=str(position),
            player_count=int(row["player_count"]),
            attributes=_core(row),
        )
        for position, row in table.iterrows()
    ]
