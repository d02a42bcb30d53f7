from fastapi import APIRouter, Depends, Response

from packing.api.dependencies import get_registry
from packing.infra.Vocabulary_Repository import VocabularyRegistry
from packing.utilities.constants import VOCABULARY_TITLES
from packing.utilities.validators import MoveInput, VocabularyInput

router = APIRouter(prefix="/api/vocabulary")


@router.get("/{kind}")
def list_entries(kind: str, registry: VocabularyRegistry = Depends(get_registry)):
    return {
        "kind": kind,
        "title": VOCABULARY_TITLES[kind],
        "entries": [e.to_dict() for e in registry.list()],
    }


@router.post("/{kind}", status_code=201)
def add_entry(kind: str, payload: VocabularyInput, registry: VocabularyRegistry = Depends(get_registry)):
    return registry.add(payload.name).to_dict()


@router.post("/{kind}/ensure")
def ensure_entry(kind: str, payload: VocabularyInput, registry: VocabularyRegistry = Depends(get_registry)):
    """Inline "add new" from the item form: reuse a same-named entry (any casing) or create it."""
    return registry.get_or_add(payload.name).to_dict()


@router.put("/{kind}/{entry_id}")
def rename_entry(kind: str, entry_id: str, payload: VocabularyInput,
                 registry: VocabularyRegistry = Depends(get_registry)):
    """Rename an entry; items carrying the old name (any casing) follow."""
    return registry.rename(entry_id, payload.name).to_dict()


@router.delete("/{kind}/{entry_id}", status_code=204)
def remove_entry(kind: str, entry_id: str, registry: VocabularyRegistry = Depends(get_registry)):
    """Items using this entry keep the name as text."""
    registry.remove(entry_id)
    return Response(status_code=204)


@router.post("/{kind}/{entry_id}/move")
def move_entry(kind: str, entry_id: str, payload: MoveInput,
               registry: VocabularyRegistry = Depends(get_registry)):
    return [e.to_dict() for e in registry.move(entry_id, payload.position)]
