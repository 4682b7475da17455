"""Exception types raised while building the dashboard report."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard report errors."""


class DataUnavailable(DashboardError):
    """The data-access layer could not supply the player snapshot or counts."""


class AggregationFailure(DashboardError):
    """The report could not be built; no partial report is returned.

    The underlying error (a ``DataUnavailable`` or whatever a sub-aggregation
    raised) is chained as ``__cause__``.
    """
