"""Market-value summary and contract-expiry listing.

Contract dates are compared as calendar dates only: `PlayerRecord` already
normalizes stored datetimes and ISO strings to `datetime.date`, and the
window bounds are dates too.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Sequence

import numpy as np
import pandas as pd

from scout_dashboard.aggregate.frame import players_frame, round_half_away
from scout_dashboard.models import (
    VALUE_BANDS,
    ExpiringContract,
    MarketAnalysis,
    MarketValueBand,
    PlayerRecord,
    whole_number,
)

# Left-closed edges: [0, 1M), [1M, 5M), [5M, 10M), [10M, 25M), [25M, 50M), [50M, inf)
VALUE_BAND_EDGES = [0, 1_000_000, 5_000_000, 10_000_000, 25_000_000, 50_000_000, np.inf]

CRITICAL_DAYS = 30
UPCOMING_DAYS = 90


def horizon_end(today: date, horizon_months: int) -> date:
    """Return `today` moved forward by whole calendar months.

    Month ends clip (Jan 31 + 1 month -> Feb 28/29).
    """
    return (pd.Timestamp(today) + pd.DateOffset(months=horizon_months)).date()


def contract_urgency(days_remaining: int) -> str:
    if days_remaining <= CRITICAL_DAYS:
        return "critical"
    if days_remaining <= UPCOMING_DAYS:
        return "upcoming"
    return "longterm"


def expiring_contracts(
    records: Sequence[PlayerRecord],
    today: date,
    horizon_months: int,
) -> list[ExpiringContract]:
    """Return every contract ending in [today, today + horizon], soonest first.

    Contracts ending on the same day keep their input order.
    """
    end = horizon_end(today, horizon_months)

    # plain dates, not datetime64: contract dates may fall outside pandas' ns range
    window = [
        r for r in records
        if r.contract_end is not None and today <= r.contract_end <= end
    ]
    window.sort(key=lambda r: r.contract_end)  # list.sort is stable

    out: list[ExpiringContract] = []
    for r in window:
        days = (r.contract_end - today).days
        out.append(
            ExpiringContract(
                id=r.id,
                name=r.name,
                team=r.team,
                position=r.position,
                contract_end=r.contract_end,
                days_remaining=days,
                urgency=contract_urgency(days),
            )
        )
    return out


def value_bands(values: pd.Series) -> list[MarketValueBand]:
    """Histogram of defined market values over the fixed bands.

    Every band is reported, empty ones with count 0.
    """
    if values.empty:
        return [MarketValueBand(label=label, count=0) for label in VALUE_BANDS]

    bands = pd.cut(values, bins=VALUE_BAND_EDGES, labels=list(VALUE_BANDS), right=False)
    stats = values.groupby(bands, observed=False).agg(["count", "mean"])
    return [
        MarketValueBand(
            label=label,
            count=int(stats.loc[label, "count"]),
            average_value=round_half_away(stats.loc[label, "mean"]),
        )
        for label in VALUE_BANDS
    ]


def summarize_market(
    records: Sequence[PlayerRecord],
    horizon_months: int = 12,
    limit: int = 20,
    today: date | None = None,
) -> MarketAnalysis:
    """Summarize market values and list contracts about to expire.

    Args:
        records: Player records.
        horizon_months: Forward window for expiring contracts.
        limit: Maximum entries in `expiring_list`; `expiring_count` still
            counts every contract inside the window.
        today: Window start; defaults to the current UTC date.

    Returns:
        `MarketAnalysis` with total/min/max over defined market values (all
        0 when there are none, whole amounts as ints), the expiring contracts and the value bands.
    """
    if horizon_months < 0:
        raise ValueError(f"horizon_months must be >= 0 (got {horizon_months})")
    if limit < 1:
        raise ValueError(f"limit must be positive (got {limit})")
    if today is None:
        today = datetime.now(timezone.utc).date()

    values = players_frame(records)["market_value"].dropna()
    expiring = expiring_contracts(records, today, horizon_months)

    if values.empty:
        total = low = high = 0
    else:
        total, low, high = (
            whole_number(float(v)) for v in (values.sum(), values.min(), values.max())
        )

    return MarketAnalysis(
        total=total,
        min_value=low,
        max_value=high,
        expiring_count=len(expiring),
        expiring_list=tuple(expiring[:limit]),
        value_bands=tuple(value_bands(values)),
    )
