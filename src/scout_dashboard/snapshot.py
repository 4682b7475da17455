"""Read-only player snapshot and the data-access contract behind it.

The orchestrator never talks to storage directly: it is handed a
`PlayerSource` and turns it into a `Snapshot` once per report.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence

from scout_dashboard.errors import DataUnavailable
from scout_dashboard.models import PlayerRecord, parse_players

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Everything one report is computed from.

    Attributes:
        players: Player records, in storage order.
        report_count: Number of scouting reports.
        user_count: Number of registered users.
    """
    players: tuple[PlayerRecord, ...]
    report_count: int = 0
    user_count: int = 0


class PlayerSource(Protocol):
    """Data-access collaborator supplying players and counts."""

    def fetch_all_players(self) -> Sequence[PlayerRecord]: ...

    def count_reports(self) -> int: ...

    def count_users(self) -> int: ...


@dataclass
class InMemorySource:
    """`PlayerSource` over records already in memory (exports, fixtures)."""
    players: Sequence[PlayerRecord] = ()
    report_count: int = 0
    user_count: int = 0

    @classmethod
    def from_documents(
        cls,
        docs: Iterable[dict[str, Any]],
        report_count: int = 0,
        user_count: int = 0,
    ) -> InMemorySource:
        """Validate raw player documents; invalid ones are skipped and logged."""
        players, bad = parse_players(docs)
        if bad:
            log.warning("Skipped %d player documents that failed validation", bad)
        return cls(players=players, report_count=report_count, user_count=user_count)

    @classmethod
    def from_json(cls, path: Path) -> InMemorySource:
        """Load a JSON export: either a list of player documents or an object
        with `players`, `reportCount` and `userCount` keys."""
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise DataUnavailable(f"could not read player export {path}: {exc}") from exc

        if isinstance(payload, list):
            return cls.from_documents(payload)
        if not isinstance(payload, dict) or not isinstance(payload.get("players"), list):
            raise DataUnavailable(f"{path} does not contain a player list")
        return cls.from_documents(
            payload["players"],
            report_count=int(payload.get("reportCount", 0)),
            user_count=int(payload.get("userCount", 0)),
        )

    def fetch_all_players(self) -> Sequence[PlayerRecord]:
        return list(self.players)

    def count_reports(self) -> int:
        return self.report_count

    def count_users(self) -> int:
        return self.user_count


def fetch_snapshot(source: PlayerSource) -> Snapshot:
    """Pull players and counts from `source` into an immutable `Snapshot`.

    Raises:
        DataUnavailable: if the source fails in any way. Nothing is retried.
    """
    try:
        players = tuple(source.fetch_all_players())
        report_count = int(source.count_reports())
        user_count = int(source.count_users())
    except DataUnavailable:
        raise
    except Exception as exc:
        raise DataUnavailable(f"player source failed: {exc}") from exc

    log.info(
        "Snapshot fetched: players=%d reports=%d users=%d",
        len(players),
        report_count,
        user_count,
    )
    return Snapshot(players=players, report_count=report_count, user_count=user_count)
