"""VocabularyEntry domain entity: one named option of a category/location/group registry."""
from typing import Optional
from packing.domain.Item import new_id
from packing.utilities.constants import VOCABULARY_KINDS, CATEGORY


class VocabularyEntry:
    def __init__(self, name: str = "", sort_order: int = 0, kind: str = CATEGORY, id: Optional[str] = None):
        if kind not in VOCABULARY_KINDS:
            raise ValueError(f"Unknown vocabulary kind: {kind}")
        self.id = id or new_id()
        self.name = name
        self.sort_order = int(sort_order)
        self.kind = kind

    def matches(self, value: str) -> bool:
        '''Case-insensitive "same option" check used for rename matching.'''
        return (value or "").lower() == (self.name or "").lower()

    def __str__(self) -> str:
        return f"{self.kind}:{self.name} (#{self.sort_order})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, kind: Optional[str] = None):
        d = dict(data) if isinstance(data, dict) else {}
        try:
            order = int(d.get("sort_order") or 0)
        except (TypeError, ValueError):
            order = 0
        return VocabularyEntry(
            name=d.get("name") or "",
            sort_order=order,
            kind=kind or d.get("kind") or CATEGORY,
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "sort_order": self.sort_order,
            "kind": self.kind,
        }
