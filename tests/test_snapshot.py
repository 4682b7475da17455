from __future__ import annotations

import json
from pathlib import Path

import pytest

from scout_dashboard.errors import DataUnavailable
from scout_dashboard.snapshot import InMemorySource, fetch_snapshot


def test_fetch_snapshot_freezes_players(make_player) -> None:
    source = InMemorySource(players=[make_player(), make_player()], report_count=5, user_count=2)
    snap = fetch_snapshot(source)
    assert isinstance(snap.players, tuple)
    assert len(snap.players) == 2
    assert (snap.report_count, snap.user_count) == (5, 2)


def test_unexpected_source_error_becomes_data_unavailable() -> None:
    class _Flaky(InMemorySource):
        def count_users(self) -> int:
            raise ConnectionResetError("peer closed")

    with pytest.raises(DataUnavailable) as exc_info:
        fetch_snapshot(_Flaky())
    assert isinstance(exc_info.value.__cause__, ConnectionResetError)


def test_from_json_object_with_counts(tmp_path: Path) -> None:
    path = tmp_path / "export.json"
    path.write_text(json.dumps({
        "players": [
            {"id": 1, "name": "Pablo", "position": "Mediocentro", "contractEnd": "2026-06-30T00:00:00.000Z"},
            {"name": "Sin Id"},
        ],
        "reportCount": 9,
        "userCount": 4,
    }), encoding="utf-8")

    source = InMemorySource.from_json(path)
    snap = fetch_snapshot(source)
    assert [p.name for p in snap.players] == ["Pablo"]
    assert (snap.report_count, snap.user_count) == (9, 4)


def test_from_json_plain_list(tmp_path: Path) -> None:
    path = tmp_path / "players.json"
    path.write_text(json.dumps([{"id": 1, "name": "Pablo"}]), encoding="utf-8")
    assert len(InMemorySource.from_json(path).players) == 1


@pytest.mark.parametrize("content", ["{not json", json.dumps({"rows": []})])
def test_from_json_rejects_bad_exports(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(DataUnavailable):
        InMemorySource.from_json(path)


def test_from_json_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DataUnavailable):
        InMemorySource.from_json(tmp_path / "missing.json")
