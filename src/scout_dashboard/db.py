"""MongoDB helpers and the Mongo-backed player source.

Centralizes creation of Mongo clients and the read-only queries the
dashboard needs: every player document and two collection counts.
"""

from __future__ import annotations

import logging
from typing import Any

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from scout_dashboard.config import Settings
from scout_dashboard.errors import DataUnavailable
from scout_dashboard.models import PlayerRecord, parse_players

log = logging.getLogger(__name__)

PLAYERS = "players"
SCOUT_REPORTS = "scout_reports"
USERS = "users"

PLAYER_PROJECTION = {
    "_id": True,
    "id": True,
    "name": True,
    "position": True,
    "age": True,
    "team": True,
    "nationality": True,
    "marketValue": True,
    "contractEnd": True,
    "goals": True,
    "assists": True,
    "attributes": True,
}


def get_client(uri: str, tls: bool = False, timeout_ms: int = 5000) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    Args:
        uri: MongoDB connection URI.
        tls: Connect over TLS using the certifi CA bundle.
        timeout_ms: Server-selection, connect and socket timeout.

    Returns:
        Configured MongoClient instance.
    """
    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": timeout_ms,
        "socketTimeoutMS": timeout_ms,
        "connectTimeoutMS": timeout_ms,
    }
    if tls:
        options.update(tls=True, tlsCAFile=certifi.where())
    return MongoClient(uri, **options)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient."""
    return client[db_name]


class MongoPlayerSource:
    """`PlayerSource` reading the players, scout_reports and users collections.

    Every query carries `maxTimeMS`, so a slow server surfaces as
    `DataUnavailable` instead of blocking the report indefinitely.
    """

    def __init__(
        self,
        db: Database[dict[str, Any]],
        timeout_ms: int = 5000,
        batch_size: int = 1000,
    ) -> None:
        self._db = db
        self.timeout_ms = timeout_ms
        self.batch_size = batch_size

    @classmethod
    def from_settings(cls, settings: Settings) -> MongoPlayerSource:
        client = get_client(
            settings.mongo_uri,
            tls=settings.mongo_tls,
            timeout_ms=settings.mongo_timeout_ms,
        )
        return cls(get_db(client, settings.mongo_db), timeout_ms=settings.mongo_timeout_ms)

    def fetch_all_players(self) -> list[PlayerRecord]:
        """Read and validate every player document.

        Documents failing validation are skipped and counted in a warning.

        Raises:
            DataUnavailable: on any PyMongo error.
        """
        try:
            cursor = (
                self._db[PLAYERS]
                .find({}, PLAYER_PROJECTION)
                .max_time_ms(self.timeout_ms)
                .batch_size(self.batch_size)
            )
            docs = list(cursor)
        except PyMongoError as e:
            raise DataUnavailable(f"could not read {PLAYERS}: {e}") from e

        players, bad = parse_players(docs)
        if bad:
            log.warning("Skipped %d %s documents that failed validation", bad, PLAYERS)
        log.info("Fetched %d players (%d documents)", len(players), len(docs))
        return players

    def count_reports(self) -> int:
        return self._count(SCOUT_REPORTS)

    def count_users(self) -> int:
        return self._count(USERS)

    def _count(self, collection_name: str) -> int:
        try:
            return int(
                self._db[collection_name].count_documents({}, maxTimeMS=self.timeout_ms)
            )
        except PyMongoError as e:
            raise DataUnavailable(f"could not count {collection_name}: {e}") from e
