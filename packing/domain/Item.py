"""Item domain entity: a packable thing with name-valued category, location and group."""
import uuid
from typing import Optional
from packing.utilities.constants import COPY_PREFIX


def new_id() -> str:
    return str(uuid.uuid4())


class Item:
    def __init__(self, name: str = "", category: str = "", location: str = "", group: str = "",
                 container: str = "", is_packed: bool = False, is_optional: bool = False,
                 trip_id: str = "", id: Optional[str] = None):
        self.id = id or new_id()
        self.name = name
        # Soft references: plain text, never ids
        self.category = category
        self.location = location
        self.group = group or ""
        self.container = container or ""
        self.is_packed = bool(is_packed)
        self.is_optional = bool(is_optional)
        self.trip_id = trip_id

    def toggle_packed(self) -> bool:
        self.is_packed = not self.is_packed
        return self.is_packed

    def duplicate(self) -> "Item":
        '''Returns an unpacked copy with a fresh id, attached to the same trip.'''
        return Item(
            name=f"{COPY_PREFIX}{self.name}",
            category=self.category,
            location=self.location,
            group=self.group,
            container=self.container,
            is_packed=False,
            is_optional=self.is_optional,
            trip_id=self.trip_id,
        )

    def copy_for_trip(self, trip_id: str) -> "Item":
        '''Copy used when cloning a whole trip: same name, fresh id, unpacked.'''
        copy = self.duplicate()
        copy.name = self.name
        copy.trip_id = trip_id
        return copy

    def __str__(self) -> str:
        parts = [f"{self.name} ({self.category} @ {self.location})"]
        if self.group:
            parts.append(f"Group: {self.group}")
        if self.container:
            parts.append(f"In: {self.container}")
        if self.is_optional:
            parts.append("optional")
        parts.append("packed" if self.is_packed else "not packed")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Item from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "name", "category", "location", "group", "container",
                   "is_packed", "is_optional", "trip_id"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        for key in ("name", "category", "location", "group", "container", "trip_id"):
            if filtered.get(key) is None:
                filtered[key] = ""
        return Item(**filtered)

    def to_dict(self):
        '''Converts the Item to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "location": self.location,
            "group": self.group,
            "container": self.container,
            "is_packed": self.is_packed,
            "is_optional": self.is_optional,
            "trip_id": self.trip_id,
        }
