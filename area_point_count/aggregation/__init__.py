"""
Aggregation Layer

Stateful counting of points per area:
- counters.py: AreaCounters accumulator and property write-back
- aggregator.py: Exhaustive scan and aggregate() entry point
- parallel.py: joblib point-chunk dispatch with partition-then-merge
"""

from area_point_count.aggregation.counters import (
    AreaCounters,
    COUNT_PROPERTY,
    TOTAL_PROPERTY,
)
from area_point_count.aggregation.aggregator import aggregate, count_points
from area_point_count.aggregation.parallel import (
    chunk_points,
    count_points_parallel,
    get_effective_worker_count,
    should_use_parallel,
)

__all__ = [
    "AreaCounters",
    "COUNT_PROPERTY",
    "TOTAL_PROPERTY",
    "aggregate",
    "count_points",
    "chunk_points",
    "count_points_parallel",
    "get_effective_worker_count",
    "should_use_parallel",
]
