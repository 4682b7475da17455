"""Fixed five-bucket age histogram."""
from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from scout_dashboard.aggregate.frame import players_frame
from scout_dashboard.models import AGE_BUCKETS, PlayerRecord

# Right-closed edges: (-inf, 20], (20, 25], (25, 30], (30, 35], (35, inf)
AGE_EDGES = [-np.inf, 20, 25, 30, 35, np.inf]


def classify_ages(records: Sequence[PlayerRecord]) -> dict[str, int]:
    """Count players per age bucket.

    Every record with a defined age lands in exactly one bucket; all five
    buckets are always present.
    """
    ages = players_frame(records)["age"].dropna()
    buckets = pd.cut(ages, bins=AGE_EDGES, labels=list(AGE_BUCKETS), right=True)
    counts = buckets.value_counts()
    return {label: int(counts.get(label, 0)) for label in AGE_BUCKETS}
