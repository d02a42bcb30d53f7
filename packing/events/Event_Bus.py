"""Simple Event Bus / Observer implementation for packing notifications.

Event names used so far:
  item.packed         -> payload {"item": Item, "trip_id": str, "is_packed": bool}
  trip.completed      -> payload {"trip_id": str, "name": str, "total": int}
  vocabulary.renamed  -> payload {"kind": str, "old_name": str, "new_name": str, "items_updated": int}
  persistence.failed  -> payload {"operation": str, "error": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
ITEM_PACKED = "item.packed"
TRIP_COMPLETED = "trip.completed"
VOCABULARY_RENAMED = "vocabulary.renamed"
PERSISTENCE_FAILED = "persistence.failed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception as e:
				logger.error("Error delivering %s to %s: %s", event_name, cb, e)


GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'ITEM_PACKED', 'TRIP_COMPLETED', 'VOCABULARY_RENAMED', 'PERSISTENCE_FAILED'
]
