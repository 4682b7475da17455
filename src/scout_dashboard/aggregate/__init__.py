"""Dashboard aggregation helpers.

This package contains the pure computations that turn a snapshot of player
records into the sections of the dashboard report (distributions, rankings,
age buckets, market summary, attribute averages) and the orchestrator that
runs them together and assembles the final report.
"""
