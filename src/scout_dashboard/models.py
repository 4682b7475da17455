"""Pydantic models for player records and the dashboard report.

Input models mirror the documents stored in the ``players`` collection.
Output models describe the AggregationReport returned to the web layer.
Attribute names are snake_case in Python and camelCase when dumped with
``by_alias=True`` (``marketValue``, ``positionDistribution``, ...).
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Iterable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.0"

CORE_ATTRIBUTES = ("pace", "shooting", "passing", "dribbling", "defending", "physical")

AGE_BUCKETS = ("16-20", "21-25", "26-30", "31-35", "36+")

VALUE_BANDS = ("0-1M", "1-5M", "5-10M", "10-25M", "25-50M", "50M+")

OPTIONAL_PLAYER_FIELDS = (
    "name", "position", "age", "team", "nationality", "market_value",
    "contract_end", "goals", "assists", "attributes",
)


def whole_number(value: float) -> int | float:
    """Return `value` as an int when it has no fractional part."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =========================================================
# INPUT RECORDS
# =========================================================

class AttributeSet(_CamelModel):
    """Technical scores attached to a player profile.

    The six core scores are required; the extended scores are optional and
    only carried through for downstream consumers.
    """
    model_config = ConfigDict(extra="ignore")
    pace: int = Field(..., ge=1, le=100)
    shooting: int = Field(..., ge=1, le=100)
    passing: int = Field(..., ge=1, le=100)
    dribbling: int = Field(..., ge=1, le=100)
    defending: int = Field(..., ge=1, le=100)
    physical: int = Field(..., ge=1, le=100)
    finishing: int | None = Field(None, ge=1, le=100)
    crossing: int | None = Field(None, ge=1, le=100)
    long_shots: int | None = Field(None, ge=1, le=100)
    positioning: int | None = Field(None, ge=1, le=100)
    diving: int | None = Field(None, ge=1, le=100)
    handling: int | None = Field(None, ge=1, le=100)
    kicking: int | None = Field(None, ge=1, le=100)
    reflexes: int | None = Field(None, ge=1, le=100)


class PlayerRecord(_CamelModel):
    """One player profile as read from storage.

    Only `id` is required. Any other field whose stored value does not
    validate (wrong type, negative count, attribute score outside 1-100) is
    treated as undefined, so the player still counts everywhere except in the
    aggregations that need that field.

    Attributes:
        id: Player identifier (numeric id, or the stringified Mongo ``_id``).
        name: Display name.
        position: Playing position; records without one are left out of the
            position-based aggregations only.
        age: Age in years.
        team: Current club.
        nationality: Country the player represents.
        market_value: Estimated transfer value, when known.
        contract_end: Contract expiry as a calendar date, when known.
        goals: Season goals.
        assists: Season assists.
        attributes: Technical scores, when the player has been rated.
    """
    model_config = ConfigDict(extra="ignore")
    id: int | str
    name: str | None = None
    position: str | None = None
    age: int | None = Field(None, ge=0)
    team: str | None = None
    nationality: str | None = None
    market_value: int | float | None = None
    contract_end: date | None = None
    goals: int | None = Field(None, ge=0)
    assists: int | None = Field(None, ge=0)
    attributes: AttributeSet | None = None

    @field_validator("contract_end", mode="before")
    @classmethod
    def _normalize_contract_end(cls, value: Any) -> Any:
        # BSON datetimes and ISO strings (with or without time) collapse to a
        # UTC calendar date; naive datetimes are already UTC (pymongo default).
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                if len(text) <= 10:
                    return date.fromisoformat(text)
                value = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return value.date()
        return value

    @field_validator("market_value", mode="before")
    @classmethod
    def _integral_market_value(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and value < 0:
            raise ValueError("market value must be >= 0")
        return whole_number(value)

    @field_validator(*OPTIONAL_PLAYER_FIELDS, mode="wrap")
    @classmethod
    def _undefined_when_invalid(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None


def parse_players(docs: Iterable[dict[str, Any]]) -> tuple[list[PlayerRecord], int]:
    """Validate raw player documents, skipping the ones without an identifier.

    A document without an ``id`` takes the string form of its Mongo ``_id``.
    Invalid optional fields do not reject a document (see `PlayerRecord`).

    Returns:
        A tuple of (validated_records, bad_count).
    """
    good: list[PlayerRecord] = []
    bad = 0

    for raw in docs:
        doc = dict(raw)
        oid = doc.pop("_id", None)
        if doc.get("id") is None and oid is not None:
            doc["id"] = str(oid)

        try:
            good.append(PlayerRecord.model_validate(doc))
        except ValidationError:
            bad += 1

    return good, bad


# =========================================================
# REPORT
# =========================================================

class Overview(_CamelModel):
    """Population counts and the two headline averages (0 when no data)."""
    total_players: int = Field(..., ge=0)
    total_reports: int = Field(..., ge=0)
    total_users: int = Field(..., ge=0)
    average_age: float = 0.0
    average_market_value: float = 0.0


class DistributionBucket(_CamelModel):
    """One category of a categorical distribution.

    ``averages`` is keyed by the camelCase name of each averaged field.
    """
    category: str
    count: int = Field(..., ge=0)
    averages: dict[str, int] = Field(default_factory=dict)


class RankedPlayer(_CamelModel):
    """Lightweight projection of a player in a top-N list.

    Besides the identity fields it carries exactly one extra key named after
    the ranked field, e.g. ``{"goals": 21}`` or ``{"marketValue": 9.0e7}``.
    """
    model_config = ConfigDict(extra="allow")
    id: int | str
    name: str | None = None
    team: str | None = None
    position: str | None = None

    @classmethod
    def from_record(cls, record: PlayerRecord, field: str) -> RankedPlayer:
        return cls.model_validate({
            "id": record.id,
            "name": record.name,
            "team": record.team,
            "position": record.position,
            to_camel(field): getattr(record, field),
        })

    @property
    def value(self) -> Any:
        """The ranked value, whatever field it came from."""
        extra = self.model_extra or {}
        return next(iter(extra.values()), None)


class TopPlayers(_CamelModel):
    top_scorers: tuple[RankedPlayer, ...] = ()
    top_assisters: tuple[RankedPlayer, ...] = ()
    most_valuable: tuple[RankedPlayer, ...] = ()


class ExpiringContract(_CamelModel):
    """A contract ending inside the horizon window.

    ``urgency`` is ``critical`` (<= 30 days), ``upcoming`` (<= 90 days) or
    ``longterm``.
    """
    id: int | str
    name: str | None = None
    team: str | None = None
    position: str | None = None
    contract_end: date
    days_remaining: int = Field(..., ge=0)
    urgency: str


class MarketValueBand(_CamelModel):
    label: str
    count: int = Field(..., ge=0)
    average_value: int = 0


class MarketAnalysis(_CamelModel):
    """Market-value summary plus the contracts about to expire.

    ``total``/``min``/``max`` cover defined market values only and are all
    0 when no player has one.
    """
    total: int | float = 0
    min_value: int | float = Field(0, alias="min")
    max_value: int | float = Field(0, alias="max")
    expiring_count: int = Field(0, ge=0)
    expiring_list: tuple[ExpiringContract, ...] = ()
    value_bands: tuple[MarketValueBand, ...] = ()


class CoreAttributes(_CamelModel):
    """Averaged core scores, rounded to whole numbers."""
    pace: int
    shooting: int
    passing: int
    dribbling: int
    defending: int
    physical: int


class PositionAttributeSummary(_CamelModel):
    """Attribute averages for one position with the number of rated players."""
    position: str
    player_count: int = Field(..., ge=1)
    attributes: CoreAttributes


class AggregationReport(_CamelModel):
    """Complete dashboard analytics for one snapshot.

    Built once per request and never mutated afterwards.
    """
    overview: Overview
    position_distribution: tuple[DistributionBucket, ...] = ()
    team_distribution: tuple[DistributionBucket, ...] = ()
    nationality_distribution: tuple[DistributionBucket, ...] = ()
    age_distribution: dict[str, int]
    top_players: TopPlayers
    market_analysis: MarketAnalysis
    attributes_by_position: dict[str, CoreAttributes] = Field(default_factory=dict)
    generated_at: datetime
    schema_version: str = SCHEMA_VERSION
