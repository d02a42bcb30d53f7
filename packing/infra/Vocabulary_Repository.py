"""Vocabulary registry: ordered, user-managed option sets referenced from items by name."""
import logging
from typing import List, Optional

from packing.domain.VocabularyEntry import VocabularyEntry
from packing.domain.errors import NotFoundError, require_name
from packing.events.Event_Bus import EventBus
from packing.events.event_helpers import publish_vocabulary_renamed
from packing.infra.Store import PackingStore
from packing.utilities.constants import VOCABULARY_KINDS

logger = logging.getLogger(__name__)


class VocabularyRegistry:
    """One registry (categories, locations or groups) backed by a store.

    Items point at entries by *name*. Renaming rewrites every matching item
    (case-insensitive on the old name) in the same store transaction;
    removing an entry leaves items untouched so their values become orphans.
    """

    def __init__(self, store: PackingStore, kind: str, bus: Optional[EventBus] = None):
        if kind not in VOCABULARY_KINDS:
            raise ValueError(f"Unknown vocabulary kind: {kind}")
        self.store = store
        self.kind = kind
        self._bus = bus

    def list(self) -> List[VocabularyEntry]:
        return self.store.load_vocabulary(self.kind)

    def names(self) -> List[str]:
        return [entry.name for entry in self.list()]

    def get(self, entry_id: str) -> VocabularyEntry:
        for entry in self.list():
            if entry.id == entry_id:
                return entry
        raise NotFoundError(f"No {self.kind} with id '{entry_id}'.")

    def find_by_name(self, name: str) -> Optional[VocabularyEntry]:
        for entry in self.list():
            if entry.matches(name.strip()):
                return entry
        return None

    def add(self, name: str) -> VocabularyEntry:
        trimmed = require_name(name, f"{self.kind.capitalize()} name")
        entries = self.list()
        next_order = max((e.sort_order for e in entries), default=-1) + 1
        entry = VocabularyEntry(name=trimmed, sort_order=next_order, kind=self.kind)
        self.store.save(entry)
        logger.info("Added %s '%s' (#%d)", self.kind, trimmed, next_order)
        return entry

    def get_or_add(self, name: str) -> VocabularyEntry:
        '''Inline "add new" during item entry: reuse a case-insensitive match if one exists.'''
        trimmed = require_name(name, f"{self.kind.capitalize()} name")
        existing = self.find_by_name(trimmed)
        return existing if existing is not None else self.add(trimmed)

    def rename(self, entry_id: str, new_name: str) -> VocabularyEntry:
        trimmed = require_name(new_name, f"{self.kind.capitalize()} name")
        entry = self.get(entry_id)
        old_name = entry.name
        old_key = old_name.lower()
        updated = 0
        with self.store.transaction(f"rename {self.kind}"):
            entry.name = trimmed
            self.store.save(entry)
            for trip in self.store.load_trips():
                changed = False
                for item in trip.items:
                    if getattr(item, self.kind).lower() == old_key:
                        setattr(item, self.kind, trimmed)
                        changed = True
                        updated += 1
                if changed:
                    self.store.save(trip)
        logger.info("Renamed %s '%s' -> '%s' (%d items updated)", self.kind, old_name, trimmed, updated)
        publish_vocabulary_renamed(self.kind, old_name, trimmed, updated, bus=self._bus)
        return entry

    def remove(self, entry_id: str) -> None:
        '''Deletes the entry only. Unknown ids raise NotFoundError.'''
        entry = self.get(entry_id)
        self.store.delete(entry)
        logger.info("Removed %s '%s'; items keep the name as text", self.kind, entry.name)

    def move(self, entry_id: str, position: int) -> List[VocabularyEntry]:
        '''Moves an entry to a new index and renumbers sort_order 0..n-1.'''
        entries = self.list()
        entry = self.get(entry_id)
        entries = [e for e in entries if e.id != entry_id]
        position = max(0, min(int(position), len(entries)))
        entries.insert(position, entry)
        with self.store.transaction(f"reorder {self.kind}"):
            for idx, e in enumerate(entries):
                if e.sort_order != idx:
                    e.sort_order = idx
                    self.store.save(e)
        return entries

    def __repr__(self) -> str:
        return f"VocabularyRegistry({self.kind}: {', '.join(self.names())})"


def registries(store: PackingStore, bus: Optional[EventBus] = None):
    '''Returns {kind: VocabularyRegistry} for every vocabulary kind.'''
    return {kind: VocabularyRegistry(store, kind, bus=bus) for kind in VOCABULARY_KINDS}


def section_orders(store: PackingStore):
    '''Canonical name order per tier, as consumed by the section builder.'''
    return {kind: [e.name for e in store.load_vocabulary(kind)] for kind in VOCABULARY_KINDS}
