"""scout_dashboard package.

Builds the analytics report behind the scouting dashboard from a snapshot
of player records: population overview, categorical distributions, top-N
rankings, age buckets, market-value summary, contract expiries, and
per-position technical-attribute averages.

Architecture:
- MongoDB holds player, scouting-report and user documents
- Pydantic models validate player documents and describe the report
- pandas computes each aggregation; dask fans them out and joins them
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
