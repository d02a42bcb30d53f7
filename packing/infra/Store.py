"""Persistence interface and its JSON-file implementation.

The store keeps one JSON document::

    {"trips": [{..., "items": [...]}, ...],
     "vocabulary": {"category": [...], "location": [...], "group": [...]}}

Trips own their items (deleting a trip drops its items). Every write runs
inside ``transaction()``: the document is snapshotted on entry, written once
on the outermost exit, and restored from the snapshot when the body raises
or the write fails. A failed write never leaves mutated-but-unsaved state.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol, Union

from packing.domain.Item import Item
from packing.domain.Trip import Trip
from packing.domain.VocabularyEntry import VocabularyEntry
from packing.domain.errors import NotFoundError, PersistenceError
from packing.events.Event_Bus import EventBus
from packing.events.event_helpers import publish_persistence_failed
from packing.utilities.constants import VOCABULARY_KINDS

logger = logging.getLogger(__name__)

Entity = Union[Trip, Item, VocabularyEntry]


class PackingStore(Protocol):
    def load_trips(self) -> List[Trip]: ...
    def load_vocabulary(self, kind: str) -> List[VocabularyEntry]: ...
    def save(self, entity: Entity) -> None: ...
    def delete(self, entity: Entity) -> None: ...
    def transaction(self): ...


def _empty_document() -> Dict[str, Any]:
    return {"trips": [], "vocabulary": {kind: [] for kind in VOCABULARY_KINDS}}


def _sorted_vocabulary(entries: List[VocabularyEntry]) -> List[VocabularyEntry]:
    # sorted() is stable: equal sort_order keeps insertion order
    return sorted(entries, key=lambda e: e.sort_order)


class JsonStore:
    def __init__(self, path: Optional[Union[str, Path]] = None, bus: Optional[EventBus] = None):
        """path=None keeps the document in memory only."""
        self.path = Path(path) if path is not None else None
        self._bus = bus
        self._document: Optional[Dict[str, Any]] = None
        self._depth = 0
        self._snapshot: Optional[Dict[str, Any]] = None

    # --- Document lifecycle -------------------------------------------------
    @property
    def document(self) -> Dict[str, Any]:
        if self._document is None:
            self._document = self._read()
        return self._document

    def _read(self) -> Dict[str, Any]:
        if self.path is None or not self.path.exists():
            return _empty_document()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f) or {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read store %s: %s", self.path, e)
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Malformed store document in {self.path}")
        doc = _empty_document()
        doc["trips"] = [t for t in data.get("trips") or [] if isinstance(t, dict)]
        vocabulary = data.get("vocabulary") or {}
        for kind in VOCABULARY_KINDS:
            doc["vocabulary"][kind] = [e for e in vocabulary.get(kind) or [] if isinstance(e, dict)]
        return doc

    def _write(self, document: Dict[str, Any]) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".packing_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(document, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, str(self.path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def reload(self) -> None:
        '''Drops the cached document so the next read comes from disk.'''
        if self._depth:
            raise PersistenceError("Cannot reload inside a transaction")
        self._document = None

    def export_document(self) -> Dict[str, Any]:
        return copy.deepcopy(self.document)

    @contextmanager
    def transaction(self, operation: str = "write") -> Iterator["JsonStore"]:
        if self._depth == 0:
            self._snapshot = copy.deepcopy(self.document)
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._rollback()
            raise
        self._depth -= 1
        if self._depth == 0:
            self._commit(operation)

    def _commit(self, operation: str) -> None:
        try:
            self._write(self.document)
        except (OSError, TypeError, ValueError) as e:
            self._rollback()
            logger.error("Persistence failed during %s: %s", operation, e)
            publish_persistence_failed(operation, e, bus=self._bus)
            raise PersistenceError(f"Failed to persist {operation}: {e}") from e
        self._snapshot = None
        logger.debug("Committed %s", operation)

    def _rollback(self) -> None:
        if self._snapshot is not None:
            self._document = self._snapshot
        self._snapshot = None

    # --- Reads --------------------------------------------------------------
    def load_trips(self) -> List[Trip]:
        '''Returns every trip, newest first.'''
        trips = [Trip.from_dict(t) for t in self.document["trips"]]
        trips.sort(key=lambda t: t.created_at, reverse=True)
        return trips

    def load_trip(self, trip_id: str) -> Trip:
        return Trip.from_dict(self._trip_record(trip_id))

    def load_vocabulary(self, kind: str) -> List[VocabularyEntry]:
        records = self._vocabulary_records(kind)
        return _sorted_vocabulary([VocabularyEntry.from_dict(r, kind=kind) for r in records])

    def _trip_record(self, trip_id: str) -> Dict[str, Any]:
        for record in self.document["trips"]:
            if record.get("id") == trip_id:
                return record
        raise NotFoundError(f"Trip '{trip_id}' not found.")

    def _vocabulary_records(self, kind: str) -> List[Dict[str, Any]]:
        if kind not in VOCABULARY_KINDS:
            raise ValueError(f"Unknown vocabulary kind: {kind}")
        return self.document["vocabulary"][kind]

    # --- Writes -------------------------------------------------------------
    def save(self, entity: Entity) -> None:
        '''Upserts a Trip, Item or VocabularyEntry.'''
        with self.transaction(f"save {type(entity).__name__}"):
            if isinstance(entity, Trip):
                _upsert(self.document["trips"], entity.to_dict())
            elif isinstance(entity, Item):
                trip = self._trip_record(entity.trip_id)
                _upsert(trip.setdefault("items", []), entity.to_dict())
            elif isinstance(entity, VocabularyEntry):
                _upsert(self._vocabulary_records(entity.kind), entity.to_dict())
            else:
                raise TypeError(f"Cannot persist {type(entity).__name__}")

    def delete(self, entity: Entity) -> None:
        with self.transaction(f"delete {type(entity).__name__}"):
            if isinstance(entity, Trip):
                records = self.document["trips"]
            elif isinstance(entity, Item):
                records = self._trip_record(entity.trip_id).setdefault("items", [])
            elif isinstance(entity, VocabularyEntry):
                records = self._vocabulary_records(entity.kind)
            else:
                raise TypeError(f"Cannot delete {type(entity).__name__}")
            if not _remove(records, entity.id):
                raise NotFoundError(f"{type(entity).__name__} '{entity.id}' not found.")


def _upsert(records: List[Dict[str, Any]], record: Dict[str, Any]) -> None:
    for idx, existing in enumerate(records):
        if existing.get("id") == record["id"]:
            records[idx] = record
            return
    records.append(record)


def _remove(records: List[Dict[str, Any]], record_id: str) -> bool:
    for idx, existing in enumerate(records):
        if existing.get("id") == record_id:
            del records[idx]
            return True
    return False


__all__ = ['PackingStore', 'JsonStore', 'Entity']
