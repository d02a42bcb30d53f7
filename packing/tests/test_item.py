import unittest
from packing.domain.Item import Item


class TestItem(unittest.TestCase):

    def setUp(self):
        self.item = Item("Socks", "Clothes", "Bedroom", group="Mine", container="Blue bag",
                         is_optional=True, trip_id="trip-1")

    def test_toggle_packed(self):
        self.assertTrue(self.item.toggle_packed())
        self.assertTrue(self.item.is_packed)
        self.assertFalse(self.item.toggle_packed())
        self.assertFalse(self.item.is_packed)

    def test_duplicate_resets_packed_and_prefixes_name(self):
        self.item.is_packed = True
        copy = self.item.duplicate()
        self.assertNotEqual(copy.id, self.item.id)
        self.assertEqual(copy.name, "Copy of Socks")
        self.assertFalse(copy.is_packed)
        self.assertEqual(copy.trip_id, "trip-1")
        for field in ("category", "location", "group", "container", "is_optional"):
            self.assertEqual(getattr(copy, field), getattr(self.item, field))

    def test_copy_for_trip_keeps_name(self):
        self.item.is_packed = True
        copy = self.item.copy_for_trip("trip-2")
        self.assertEqual(copy.name, "Socks")
        self.assertEqual(copy.trip_id, "trip-2")
        self.assertFalse(copy.is_packed)
        self.assertNotEqual(copy.id, self.item.id)

    def test_from_dict_ignores_unknown_keys_and_fills_defaults(self):
        item = Item.from_dict({"name": "Charger", "category": "Tech", "location": "Kitchen",
                               "group": None, "colour": "black"})
        self.assertEqual(item.name, "Charger")
        self.assertEqual(item.group, "")
        self.assertEqual(item.container, "")
        self.assertFalse(item.is_packed)
        self.assertTrue(item.id)

    def test_to_dict_round_trip_keeps_identity(self):
        restored = Item.from_dict(self.item.to_dict())
        self.assertEqual(restored.to_dict(), self.item.to_dict())
