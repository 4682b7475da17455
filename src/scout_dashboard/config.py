"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads MongoDB connection details and report tuning knobs from the
environment (after loading a project-root `.env`).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")


@dataclass(frozen=True)
class Settings:
    """Container for dashboard configuration read from the environment.

    Attributes:
        mongo_uri: MongoDB connection URI.
        mongo_db: Database holding the players, scout_reports and users collections.
        mongo_tls: Whether to connect over TLS with the certifi CA bundle.
        mongo_timeout_ms: Connection timeout and per-query deadline (maxTimeMS).
        contract_horizon_months: Forward window used to list expiring contracts.
        expiring_limit: Maximum number of expiring contracts listed.
        top_n: Length cap of every ranked list.
        scheduler: Dask scheduler used to run the aggregations.
        log_level: Root logging level.
        log_path: Optional log file; stdout only when unset.
    """
    mongo_uri: str
    mongo_db: str
    mongo_tls: bool
    mongo_timeout_ms: int
    contract_horizon_months: int
    expiring_limit: int
    top_n: int
    scheduler: str
    log_level: int
    log_path: Path | None


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer (got {raw!r}).") from None
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum} (got {value}).")
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if a numeric variable is malformed or out of range, or
            `LOG_LEVEL` is not a known logging level name.
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        raise RuntimeError(f"LOG_LEVEL {level_name!r} is not a logging level.")

    log_path = os.getenv("LOG_PATH", "").strip()

    return Settings(
        mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        mongo_db=os.getenv("MONGO_DB", "scouting"),
        mongo_tls=_bool_env("MONGO_TLS", False),
        mongo_timeout_ms=_int_env("MONGO_TIMEOUT_MS", 5000, minimum=1),
        contract_horizon_months=_int_env("CONTRACT_HORIZON_MONTHS", 12),
        expiring_limit=_int_env("EXPIRING_LIMIT", 20, minimum=1),
        top_n=_int_env("TOP_N", 10, minimum=1),
        scheduler=os.getenv("DASHBOARD_SCHEDULER", "threads").strip() or "threads",
        log_level=log_level,
        log_path=Path(log_path) if log_path else None,
    )
