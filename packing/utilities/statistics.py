"""
Statistics module for the Packing Planner.
Provides insights across trips: progress, most used vocabulary, orphan values.
"""
from collections import Counter
from typing import Dict, List, Tuple
import logging

from packing.utilities.constants import VOCABULARY_KINDS

logger = logging.getLogger(__name__)


class PackingStats:
    """Generate statistics from the store's trips and vocabularies."""

    def __init__(self, store):
        self.store = store

    def _value_counts(self, kind: str) -> Counter:
        counter = Counter()
        for trip in self.store.load_trips():
            for item in trip.items:
                value = getattr(item, kind)
                if value:
                    counter[value] += 1
        return counter

    def most_used(self, kind: str, limit: int = 5) -> List[Tuple[str, int]]:
        """Most frequently referenced category/location/group values."""
        if kind not in VOCABULARY_KINDS:
            raise ValueError(f"Unknown vocabulary kind: {kind}")
        return self._value_counts(kind).most_common(limit)

    def orphan_values(self, kind: str) -> Dict[str, int]:
        """Item values with no registry entry of exactly that name, with their item counts."""
        registered = {entry.name for entry in self.store.load_vocabulary(kind)}
        counts = self._value_counts(kind)
        return {value: n for value, n in sorted(counts.items()) if value not in registered}

    def overview(self) -> Dict:
        trips = self.store.load_trips()
        total = sum(t.total_count for t in trips)
        packed = sum(t.packed_count for t in trips)
        return {
            'trips': len(trips),
            'items': total,
            'packed': packed,
            'progress': packed / total if total else 0.0,
            'completed_trips': sum(1 for t in trips if t.is_complete),
            'optional_items': sum(1 for t in trips for i in t.items if i.is_optional),
            'most_used': {kind: self.most_used(kind) for kind in VOCABULARY_KINDS},
            'orphans': {kind: self.orphan_values(kind) for kind in VOCABULARY_KINDS},
        }
