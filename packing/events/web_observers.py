"""Web-facing observers for packing events.

Subscribes to the GLOBAL_EVENT_BUS for every packing event and keeps a
bounded in-memory buffer of recent events that the API exposes at
``GET /api/events?since=<cursor>``.

Each event carries an auto-increment integer id (cursor) so clients can
poll only for newer events. The buffer is per-process and capped at
MAX_EVENTS entries.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from packing.utilities.constants import MAX_EVENTS
from .Event_Bus import (
    GLOBAL_EVENT_BUS, ITEM_PACKED, TRIP_COMPLETED, VOCABULARY_RENAMED, PERSISTENCE_FAILED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
_started = False

_OBSERVED = (ITEM_PACKED, TRIP_COMPLETED, VOCABULARY_RENAMED, PERSISTENCE_FAILED)


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt: Dict[str, Any] = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat()
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None and hasattr(item, 'name'):
                evt['item_id'] = item.id
                evt['name'] = item.name
            # Copy plain scalar fields
            for k, v in payload.items():
                if k != 'item' and isinstance(v, (str, int, float, bool)):
                    evt[k] = v
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _OBSERVED:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Web observers subscribed to %d event types", len(_OBSERVED))


def stop():
    global _started
    for name in _OBSERVED:
        GLOBAL_EVENT_BUS.unsubscribe(name, _record)
    _started = False


def clear():
    global _next_id
    with _lock:
        _events.clear()
        _next_id = 1


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the buffered events. Response includes
    next_cursor (largest id) so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'stop', 'clear', 'get_events']
