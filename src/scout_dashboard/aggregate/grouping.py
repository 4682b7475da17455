"""Generic categorical group-by used for the position, team and nationality
distributions."""
from __future__ import annotations

from typing import Sequence

from pydantic.alias_generators import to_camel

from scout_dashboard.aggregate.frame import (
    CATEGORY_FIELDS,
    NUMERIC_FIELDS,
    players_frame,
    require_field,
    round_half_away,
)
from scout_dashboard.models import DistributionBucket, PlayerRecord


def aggregate_by_category(
    records: Sequence[PlayerRecord],
    category_field: str,
    numeric_fields: Sequence[str] = (),
    limit: int | None = None,
) -> list[DistributionBucket]:
    """Count records per category and average the requested numeric fields.

    Records whose category is undefined are skipped. Within a group, an
    average only considers records where that field is defined and is 0 when
    none are. Buckets are ordered by descending count; equal counts keep the
    order in which the categories first appear in `records`.

    Args:
        records: Player records.
        category_field: One of `position`, `team`, `nationality`.
        numeric_fields: Fields to average per group (subset of age, goals,
            assists, market_value).
        limit: Keep only the first `limit` buckets after sorting.

    Returns:
        List of `DistributionBucket`; averages are rounded half away from zero
        and keyed by camelCase field name.
    """
    require_field(category_field, CATEGORY_FIELDS)
    for f in numeric_fields:
        require_field(f, NUMERIC_FIELDS)
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be positive (got {limit})")

    pdf = players_frame(records)
    pdf = pdf[pdf[category_field].notna()]
    if pdf.empty:
        return []

    grouped = pdf.groupby(category_field, sort=False)
    table = grouped.size().rename("count").to_frame()
    if numeric_fields:
        table = table.join(grouped[list(numeric_fields)].mean())

    # mergesort is stable: ties keep first-seen order from groupby(sort=False)
    table = table.sort_values("count", ascending=False, kind="mergesort")
    if limit is not None:
        table = table.head(limit)

    return [
        DistributionBucket(
            category=str(category),
            count=int(row["count"]),
            averages={to_camel(f): round_half_away(row[f]) for f in numeric_fields},
        )
        for category, row in table.iterrows()
    ]
