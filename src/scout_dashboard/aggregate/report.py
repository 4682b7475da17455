"""Dashboard report orchestration.

`StatsOrchestrator` runs every aggregation against one immutable snapshot
and assembles the `AggregationReport`. The aggregations are independent
pure functions, so they are submitted together as dask delayed tasks and
joined with a single `compute` call (threaded by default; `sync` runs them
one after another with identical results).
"""
from __future__ import annotations

import logging
import time
from datetime import date, datetime, timezone
from typing import Any, Callable, Sequence

import dask
import pandas as pd
from dask import delayed  # type: ignore[attr-defined]

from scout_dashboard.aggregate.ages import classify_ages
from scout_dashboard.aggregate.attributes import average_attributes, attributes_by_position_items
from scout_dashboard.aggregate.frame import players_frame
from scout_dashboard.aggregate.grouping import aggregate_by_category
from scout_dashboard.aggregate.market import summarize_market
from scout_dashboard.aggregate.ranking import top_n
from scout_dashboard.config import Settings
from scout_dashboard.errors import AggregationFailure, DataUnavailable
from scout_dashboard.models import (
    SCHEMA_VERSION,
    AggregationReport,
    Overview,
    PlayerRecord,
    PositionAttributeSummary,
    TopPlayers,
)
from scout_dashboard.snapshot import PlayerSource, Snapshot, fetch_snapshot

log = logging.getLogger(__name__)

POSITION_AVERAGES = ("age", "goals", "assists", "market_value")
TEAM_AVERAGES = ("age", "market_value")
DISTRIBUTION_LIMIT = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def summarize_overview(
    records: Sequence[PlayerRecord],
    report_count: int,
    user_count: int,
) -> Overview:
    """Population counts with average age and market value (0 when undefined)."""
    pdf = players_frame(records)
    avg_age = pdf["age"].mean()
    avg_value = pdf["market_value"].mean()
    return Overview(
        total_players=len(pdf),
        total_reports=report_count,
        total_users=user_count,
        average_age=0.0 if pd.isna(avg_age) else float(avg_age),
        average_market_value=0.0 if pd.isna(avg_value) else float(avg_value),
    )


class StatsOrchestrator:
    """Builds dashboard reports from an injected `PlayerSource`.

    Holds configuration only; nothing computed is kept between calls.

    Args:
        source: Data-access collaborator used by `generate`.
        horizon_months: Contract-expiry window.
        expiring_limit: Maximum listed expiring contracts.
        top_n: Length cap of the ranked lists.
        scheduler: Dask scheduler name (`threads`, `processes`, `sync`).
        clock: Returns the current UTC datetime; the expiry window starts on
            its date.
    """

    def __init__(
        self,
        source: PlayerSource,
        horizon_months: int = 12,
        expiring_limit: int = 20,
        top_n: int = 10,
        scheduler: str = "threads",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.source = source
        self.horizon_months = horizon_months
        self.expiring_limit = expiring_limit
        self.top_n = top_n
        self.scheduler = scheduler
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        source: PlayerSource,
        settings: Settings,
        horizon_months: int | None = None,
        expiring_limit: int | None = None,
        top_n: int | None = None,
    ) -> StatsOrchestrator:
        """Build from `settings`; keyword values that are not None win."""
        if horizon_months is None:
            horizon_months = settings.contract_horizon_months
        if expiring_limit is None:
            expiring_limit = settings.expiring_limit
        if top_n is None:
            top_n = settings.top_n
        return cls(
            source,
            horizon_months=horizon_months,
            expiring_limit=expiring_limit,
            top_n=top_n,
            scheduler=settings.scheduler,
        )

    def generate(self) -> AggregationReport:
        """Fetch a fresh snapshot from the source and build the report.

        Raises:
            AggregationFailure: if the snapshot cannot be fetched (chained
                `DataUnavailable`) or any aggregation fails.
        """
        return self.build_report(self._snapshot())

    def position_attributes(self) -> list[PositionAttributeSummary]:
        """Fetch a fresh snapshot and list attribute averages per position."""
        snapshot = self._snapshot()
        try:
            return attributes_by_position_items(snapshot.players)
        except Exception as exc:
            log.exception("Attribute aggregation failed")
            raise AggregationFailure("attributes by position could not be computed") from exc

    def build_report(self, snapshot: Snapshot) -> AggregationReport:
        """Run every aggregation over `snapshot` and assemble the report.

        Raises:
            AggregationFailure: if any aggregation raises; no partial report
                is produced.
        """
        generated_at = self._clock()
        today: date = generated_at.date()
        players = list(snapshot.players)
        started = time.perf_counter()

        log.info("Building dashboard report for %d players", len(players))

        tasks: dict[str, Any] = {
            "overview": delayed(summarize_overview)(
                players, snapshot.report_count, snapshot.user_count
            ),
            "positions": delayed(aggregate_by_category)(
                players, "position", POSITION_AVERAGES
            ),
            "teams": delayed(aggregate_by_category)(
                players, "team", TEAM_AVERAGES, DISTRIBUTION_LIMIT
            ),
            "nationalities": delayed(aggregate_by_category)(
                players, "nationality", (), DISTRIBUTION_LIMIT
            ),
            "ages": delayed(classify_ages)(players),
            "top_scorers": delayed(top_n)(players, "goals", self.top_n),
            "top_assisters": delayed(top_n)(players, "assists", self.top_n),
            "most_valuable": delayed(top_n)(players, "market_value", self.top_n),
            "market": delayed(summarize_market)(
                players, self.horizon_months, self.expiring_limit, today
            ),
            "attributes": delayed(average_attributes)(players),
        }

        try:
            (results,) = dask.compute(tasks, scheduler=self.scheduler)
            report = AggregationReport(
                overview=results["overview"],
                position_distribution=tuple(results["positions"]),
                team_distribution=tuple(results["teams"]),
                nationality_distribution=tuple(results["nationalities"]),
                age_distribution=results["ages"],
                top_players=TopPlayers(
                    top_scorers=tuple(results["top_scorers"]),
                    top_assisters=tuple(results["top_assisters"]),
                    most_valuable=tuple(results["most_valuable"]),
                ),
                market_analysis=results["market"],
                attributes_by_position=results["attributes"],
                generated_at=generated_at,
                schema_version=SCHEMA_VERSION,
            )
        except Exception as exc:
            log.exception("Dashboard aggregation failed")
            raise AggregationFailure("dashboard report could not be built") from exc

        log.info(
            "Dashboard report built in %.3fs: positions=%d expiring=%d",
            time.perf_counter() - started,
            len(report.position_distribution),
            report.market_analysis.expiring_count,
        )
        return report

    def _snapshot(self) -> Snapshot:
        try:
            return fetch_snapshot(self.source)
        except DataUnavailable as exc:
            log.error("Player snapshot unavailable: %s", exc)
            raise AggregationFailure("player snapshot unavailable") from exc
