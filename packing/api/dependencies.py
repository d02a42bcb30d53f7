"""FastAPI dependencies wiring the API to the store and repositories.

Tests swap the store with ``app.dependency_overrides[get_store] = lambda: store``.
"""
from typing import Optional

from fastapi import Depends, HTTPException

from packing.infra.Store import JsonStore
from packing.infra.Trip_Repository import TripRepository
from packing.infra.Vocabulary_Repository import VocabularyRegistry
from packing.infra.paths import STORE_FILE
from packing.utilities.constants import VOCABULARY_KINDS

_store: Optional[JsonStore] = None


def get_store() -> JsonStore:
    global _store
    if _store is None:
        _store = JsonStore(STORE_FILE)
    return _store


def get_trip_repository(store: JsonStore = Depends(get_store)) -> TripRepository:
    return TripRepository(store)


def get_registry(kind: str, store: JsonStore = Depends(get_store)) -> VocabularyRegistry:
    if kind not in VOCABULARY_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown vocabulary kind '{kind}'")
    return VocabularyRegistry(store, kind)
