"""Packing progress statistics for a trip."""
from typing import Any, Dict, NamedTuple


class TripStatistics(NamedTuple):
    packed_count: int
    total_count: int
    progress: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'packed_count': self.packed_count,
            'total_count': self.total_count,
            'progress': self.progress,
            'percent': round(self.progress * 100),
        }


def trip_statistics(trip) -> TripStatistics:
    """Return packed/total/progress computed from the trip's live items.

    progress is 0 for an empty trip and always within [0, 1].
    """
    total = len(trip.items)
    packed = sum(1 for item in trip.items if item.is_packed)
    progress = packed / total if total else 0.0
    return TripStatistics(packed, total, progress)


__all__ = ['TripStatistics', 'trip_statistics']
