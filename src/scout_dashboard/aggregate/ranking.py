"""Top-N rankings (scorers, assisters, most valuable)."""
from __future__ import annotations

from typing import Sequence

from scout_dashboard.aggregate.frame import NUMERIC_FIELDS, players_frame, require_field
from scout_dashboard.models import PlayerRecord, RankedPlayer


def top_n(
    records: Sequence[PlayerRecord],
    field: str,
    n: int = 10,
) -> list[RankedPlayer]:
    """Return the `n` records with the highest `field`, highest first.

    Records where `field` is undefined are not ranked. Equal values keep the
    relative order they have in `records`.

    Args:
        records: Player records.
        field: Numeric field to rank by (age, goals, assists, market_value).
        n: Maximum list length.
    """
    require_field(field, NUMERIC_FIELDS)
    if n < 1:
        raise ValueError(f"n must be positive (got {n})")

    records = list(records)
    pdf = players_frame(records)
    ranked = (
        pdf[pdf[field].notna()]
        .sort_values(field, ascending=False, kind="mergesort")
        .head(n)
    )
    # values come from the records, not the float64 frame, to keep ints as ints
    return [RankedPlayer.from_record(records[i], field) for i in ranked.index]
