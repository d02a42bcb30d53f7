"""Event helper utilities.

Quick import:
    from packing.events.event_helpers import (
        publish_item_packed, publish_trip_completed,
        publish_vocabulary_renamed, publish_persistence_failed
    )

Every helper accepts an optional ``bus`` so repositories can be wired to a
private EventBus in tests; the global bus is used otherwise.
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    GLOBAL_EVENT_BUS, EventBus,
    ITEM_PACKED, TRIP_COMPLETED, VOCABULARY_RENAMED, PERSISTENCE_FAILED
)

__all__ = [
    'publish_item_packed', 'publish_trip_completed',
    'publish_vocabulary_renamed', 'publish_persistence_failed',
    'ITEM_PACKED', 'TRIP_COMPLETED', 'VOCABULARY_RENAMED', 'PERSISTENCE_FAILED'
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_item_packed(item: Any, bus: Optional[EventBus] = None):
    """Publish an item.packed event (fired on every toggle, packed or not)."""
    _bus(bus).publish(ITEM_PACKED, {
        'item': item,
        'trip_id': getattr(item, 'trip_id', ''),
        'is_packed': bool(getattr(item, 'is_packed', False))
    })


def publish_trip_completed(trip: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(TRIP_COMPLETED, {
        'trip_id': trip.id,
        'name': trip.name,
        'total': trip.total_count
    })


def publish_vocabulary_renamed(kind: str, old_name: str, new_name: str, items_updated: int,
                               bus: Optional[EventBus] = None):
    _bus(bus).publish(VOCABULARY_RENAMED, {
        'kind': kind,
        'old_name': old_name,
        'new_name': new_name,
        'items_updated': items_updated
    })


def publish_persistence_failed(operation: str, error: Exception, bus: Optional[EventBus] = None):
    _bus(bus).publish(PERSISTENCE_FAILED, {
        'operation': operation,
        'error': str(error)
    })
