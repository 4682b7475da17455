"""Shared helpers for the pandas-backed aggregations.

Every aggregation receives the raw record sequence and builds its own
DataFrame with `players_frame`. Row labels are the positions of the records
in the input sequence, so results can be mapped back to the original
`PlayerRecord` objects and ties can be broken by input order.
"""
from __future__ import annotations

import math
from typing import Any, Sequence

import pandas as pd

from scout_dashboard.models import PlayerRecord

CATEGORY_FIELDS = ("position", "team", "nationality")
NUMERIC_FIELDS = ("age", "goals", "assists", "market_value")
FRAME_COLUMNS = ("id", "name", *CATEGORY_FIELDS, *NUMERIC_FIELDS, "contract_end")


def players_frame(records: Sequence[PlayerRecord]) -> pd.DataFrame:
    """Return a DataFrame with one row per record and a fixed column set.

    Numeric columns are float64 with NaN for undefined values; category
    columns keep ``None`` so group-by drops them.
    """
    rows = [{col: getattr(r, col) for col in FRAME_COLUMNS} for r in records]
    pdf = pd.DataFrame(rows, columns=list(FRAME_COLUMNS))
    for col in NUMERIC_FIELDS:
        pdf[col] = pdf[col].astype("float64")
    return pdf


def require_field(field: str, allowed: Sequence[str]) -> None:
    """Raise ValueError unless `field` is one of `allowed`."""
    if field not in allowed:
        raise ValueError(f"unsupported field {field!r}; expected one of {', '.join(allowed)}")


def round_half_away(value: Any) -> int:
    """Round to the nearest integer, halves away from zero; NaN/None -> 0.

    Python's built-in `round` uses banker's rounding (2.5 -> 2), which the
    dashboard must not.
    """
    if value is None:
        return 0
    value = float(value)
    if math.isnan(value):
        return 0
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
