"""
Area Counter Module
===================

Mutable per-area accumulator owned by the aggregator.

Design:
- Explicit counter map, passed and returned, never module-level state
- ``count``: points attributed to the area, at most one per point
- ``total``: one-shot fallback value, written the first time a part of the
  area fails to match a point and never revised afterwards
- Partial counters from separate point chunks merge by summing counts and
  keeping the first fallback value
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, MutableMapping, Optional, Sequence

COUNT_PROPERTY = "count"
TOTAL_PROPERTY = "total"


@dataclass
class AreaCounters:
    """
    Per-area ``count`` and ``total`` accumulators.

    Usage:
        counters = AreaCounters.for_areas(range(3))
        counters.increment(0)
        counters.record_fallback(1, total=3)
        counters.apply(features)
    """

    counts: Dict[int, int] = field(default_factory=dict)
    totals: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def for_areas(cls, area_ids: Iterable[int]) -> "AreaCounters":
        """Counters with every area's count initialised to zero."""
        return cls(counts={area_id: 0 for area_id in area_ids})

    def increment(self, area_id: int) -> None:
        """Attribute one more point to ``area_id``."""
        self.counts[area_id] = self.counts.get(area_id, 0) + 1

    def record_fallback(self, area_id: int, total: int) -> bool:
        """
        Set the area's fallback total if it is not set yet.

        Returns:
            True if this call wrote the value.
        """
        if area_id in self.totals:
            return False
        self.totals[area_id] = total
        return True

    def count(self, area_id: int) -> int:
        return self.counts.get(area_id, 0)

    def total(self, area_id: int) -> Optional[int]:
        return self.totals.get(area_id)

    def merge(self, other: "AreaCounters") -> "AreaCounters":
        """Fold another partial result into this one (in place)."""
        for area_id, value in other.counts.items():
            self.counts[area_id] = self.counts.get(area_id, 0) + value
        for area_id, value in other.totals.items():
            self.record_fallback(area_id, value)
        return self

    def apply(self, features: Sequence[MutableMapping[str, Any]]) -> None:
        """
        Write the counters into the area features' property maps.

        ``count`` is always written, replacing any input value. ``total`` is
        written only for areas with a recorded fallback whose properties do
        not already carry a ``total`` key.
        """
        for area_id, feature in enumerate(features):
            properties = feature.get("properties")
            if properties is None:
                properties = {}
                feature["properties"] = properties

            if area_id in self.counts:
                properties[COUNT_PROPERTY] = self.counts[area_id]
            if area_id in self.totals and TOTAL_PROPERTY not in properties:
                properties[TOTAL_PROPERTY] = self.totals[area_id]
