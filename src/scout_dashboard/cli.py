"""Command-line interface for building dashboard reports.

Provides subcommands: `report` and `attributes`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace and
returns a process exit code.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from scout_dashboard.aggregate.report import StatsOrchestrator
from scout_dashboard.config import Settings, get_settings
from scout_dashboard.db import MongoPlayerSource
from scout_dashboard.errors import DashboardError
from scout_dashboard.logging_config import configure_logging
from scout_dashboard.snapshot import InMemorySource, PlayerSource

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _source(args: argparse.Namespace, settings: Settings) -> PlayerSource:
    """Use the JSON export given with --input, otherwise MongoDB."""
    if args.input is not None:
        log.info("Reading players from %s", args.input)
        return InMemorySource.from_json(args.input)
    return MongoPlayerSource.from_settings(settings)


def _orchestrator(args: argparse.Namespace, settings: Settings) -> StatsOrchestrator:
    return StatsOrchestrator.from_settings(
        _source(args, settings),
        settings,
        horizon_months=getattr(args, "horizon_months", None),
        expiring_limit=getattr(args, "expiring_limit", None),
        top_n=getattr(args, "top_n", None),
    )


def _write(payload: Any, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    log.info("Wrote %s", output)


# --------------------------------------------------
# Commands
# --------------------------------------------------
def cmd_report(args: argparse.Namespace, settings: Settings) -> int:
    """Build the full dashboard report and write it as camelCase JSON."""
    try:
        report = _orchestrator(args, settings).generate()
    except DashboardError as e:
        log.error("Report failed: %s (cause: %s)", e, e.__cause__)
        return 1

    _write(report.model_dump(mode="json", by_alias=True), args.output)
    return 0


def cmd_attributes(args: argparse.Namespace, settings: Settings) -> int:
    """Write the per-position attribute averages with player counts."""
    try:
        items = _orchestrator(args, settings).position_attributes()
    except DashboardError as e:
        log.error("Attributes failed: %s (cause: %s)", e, e.__cause__)
        return 1

    _write([i.model_dump(mode="json", by_alias=True) for i in items], args.output)
    return 0


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Both subcommands accept `--input` (a JSON export used instead of
    MongoDB) and `--output` (defaults to stdout).
    """
    p = argparse.ArgumentParser(prog="scout-dashboard")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_report = sub.add_parser("report")
    p_report.add_argument("--horizon-months", type=int, default=None)
    p_report.add_argument("--top-n", type=int, default=None)
    p_report.add_argument("--expiring-limit", type=int, default=None)

    p_attrs = sub.add_parser("attributes")

    for sp in (p_report, p_attrs):
        sp.add_argument("--input", type=Path, default=None)
        sp.add_argument("--output", type=Path, default=None)

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_path, settings.log_level, stream=sys.stderr)

    if args.cmd == "report":
        return cmd_report(args, settings)
    if args.cmd == "attributes":
        return cmd_attributes(args, settings)
    raise SystemExit(2)


if __name__ == "__main__":
    raise SystemExit(main())
