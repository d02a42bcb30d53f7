"""Trip aggregate: owns an ordered list of Items and derives packing progress."""
from datetime import datetime
from typing import List, Optional
from packing.domain.Item import Item, new_id
from packing.domain.errors import NotFoundError
from packing.utilities.constants import COPY_PREFIX


def _naive_local(value: datetime) -> datetime:
    # Trips are ordered by created_at, so aware values are stored as naive local time
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class Trip:
    def __init__(self, name: str = "", created_at: Optional[datetime] = None,
                 items: Optional[List[Item]] = None, id: Optional[str] = None):
        self.id = id or new_id()
        self.name = name
        self.created_at = _naive_local(created_at) if created_at else datetime.now()
        self.items: List[Item] = []
        for item in items or []:
            self.add_item(item)

    # --- Derived reads (never cached) ---------------------------------------
    @property
    def packed_count(self) -> int:
        return sum(1 for item in self.items if item.is_packed)

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def progress(self) -> float:
        total = self.total_count
        if total == 0:
            return 0.0
        return self.packed_count / total

    @property
    def is_complete(self) -> bool:
        return self.total_count > 0 and self.packed_count == self.total_count

    # --- Item collection ----------------------------------------------------
    def add_item(self, item: Item):
        '''
        Attaches an item to this trip (items never move between trips).
        '''
        item.trip_id = self.id
        self.items.append(item)
        return item

    def get_item(self, item_id: str) -> Item:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Item '{item_id}' not found in trip '{self.name}'.")

    def remove_item(self, item_id: str) -> Item:
        item = self.get_item(item_id)
        self.items.remove(item)
        return item

    def get_items(self):
        return self.items

    def duplicate(self) -> "Trip":
        '''Returns a new trip named "Copy of ..." with unpacked copies of every item.'''
        copy = Trip(name=f"{COPY_PREFIX}{self.name}")
        for item in self.items:
            copy.add_item(item.copy_for_trip(copy.id))
        return copy

    def __str__(self) -> str:
        return f"{self.name} - {self.packed_count}/{self.total_count} packed"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        '''Creates a Trip (with its items) from a dictionary.'''
        d = dict(data) if isinstance(data, dict) else {}
        created = d.get("created_at")
        if isinstance(created, str) and created:
            try:
                if created.endswith("Z"):
                    created = created[:-1] + "+00:00"
                created = datetime.fromisoformat(created)
            except ValueError:
                created = None
        elif not isinstance(created, datetime):
            created = None
        items = d.get("items")
        if not isinstance(items, list):
            items = []
        return Trip(
            name=d.get("name") or "",
            created_at=created,
            items=[Item.from_dict(i) for i in items if isinstance(i, dict)],
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "items": [item.to_dict() for item in self.items],
        }
