"""Trip repository: trips and the items they own, persisted through a PackingStore."""
import logging
from typing import List, Optional, Tuple

from packing.domain.Item import Item
from packing.domain.Trip import Trip
from packing.domain.errors import NotFoundError, ValidationError, require_name
from packing.events.Event_Bus import EventBus
from packing.events.event_helpers import publish_item_packed, publish_trip_completed
from packing.infra.Store import PackingStore

logger = logging.getLogger(__name__)

EDITABLE_ITEM_FIELDS = ("name", "category", "location", "group", "container", "is_packed", "is_optional")


class TripRepository:
    def __init__(self, store: PackingStore, bus: Optional[EventBus] = None):
        self.store = store
        self._bus = bus

    # --- Trips --------------------------------------------------------------
    def list_trips(self) -> List[Trip]:
        return self.store.load_trips()

    def get_trip(self, trip_id: str) -> Trip:
        for trip in self.store.load_trips():
            if trip.id == trip_id:
                return trip
        raise NotFoundError(f"Trip '{trip_id}' not found.")

    def create_trip(self, name: str, clone_from: Optional[str] = None) -> Trip:
        """Create a trip, optionally cloning the items of another trip.

        Cloned items get fresh ids and start unpacked; the source is never shared.
        """
        trimmed = require_name(name, "Trip name")
        source = self.get_trip(clone_from) if clone_from else None
        trip = Trip(name=trimmed)
        if source is not None:
            for item in source.items:
                trip.add_item(item.copy_for_trip(trip.id))
        self.store.save(trip)
        logger.info("Created trip '%s' with %d items", trip.name, trip.total_count)
        return trip

    def rename_trip(self, trip_id: str, name: str) -> Trip:
        trimmed = require_name(name, "Trip name")
        trip = self.get_trip(trip_id)
        trip.name = trimmed
        self.store.save(trip)
        return trip

    def delete_trip(self, trip_id: str) -> None:
        '''Deletes the trip and, with it, every item it owns.'''
        trip = self.get_trip(trip_id)
        self.store.delete(trip)
        logger.info("Deleted trip '%s' (%d items)", trip.name, trip.total_count)

    def duplicate_trip(self, trip_id: str) -> Trip:
        copy = self.get_trip(trip_id).duplicate()
        self.store.save(copy)
        return copy

    def set_all_packed(self, trip_id: str, packed: bool = False) -> Trip:
        '''Marks every item packed or unpacked (e.g. reset a list for the next trip).'''
        trip = self.get_trip(trip_id)
        for item in trip.items:
            item.is_packed = bool(packed)
        self.store.save(trip)
        return trip

    # --- Items --------------------------------------------------------------
    def find_item(self, item_id: str) -> Tuple[Trip, Item]:
        for trip in self.store.load_trips():
            for item in trip.items:
                if item.id == item_id:
                    return trip, item
        raise NotFoundError(f"Item '{item_id}' not found.")

    def add_item(self, trip_id: str, name: str, category: str, location: str, group: str = "",
                 container: str = "", is_optional: bool = False) -> Item:
        item = Item(
            name=require_name(name, "Item name"),
            category=require_name(category, "Category"),
            location=require_name(location, "Location"),
            group=(group or "").strip(),
            container=(container or "").strip(),
            is_optional=is_optional,
        )
        trip = self.get_trip(trip_id)
        trip.add_item(item)
        self.store.save(item)
        return item

    def update_item(self, item_id: str, **fields) -> Item:
        unknown = set(fields) - set(EDITABLE_ITEM_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown item fields: {', '.join(sorted(unknown))}")
        changes = {}
        for key, value in fields.items():
            if value is None:
                continue
            if key in ("name", "category", "location"):
                changes[key] = require_name(value, key.capitalize())
            elif key in ("group", "container"):
                changes[key] = str(value).strip()
            else:
                changes[key] = bool(value)
        _, item = self.find_item(item_id)
        for key, value in changes.items():
            setattr(item, key, value)
        self.store.save(item)
        return item

    def delete_item(self, item_id: str) -> None:
        _, item = self.find_item(item_id)
        self.store.delete(item)

    def duplicate_item(self, item_id: str) -> Item:
        _, item = self.find_item(item_id)
        copy = item.duplicate()
        self.store.save(copy)
        return copy

    def toggle_packed(self, item_id: str) -> Item:
        trip, item = self.find_item(item_id)
        item.toggle_packed()
        self.store.save(item)
        publish_item_packed(item, bus=self._bus)
        if item.is_packed and trip.is_complete:
            logger.info("Trip '%s' fully packed", trip.name)
            publish_trip_completed(trip, bus=self._bus)
        return item
