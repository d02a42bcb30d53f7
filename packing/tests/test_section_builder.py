import unittest
from packing.domain.Item import Item
from packing.logic.sections.section_builder import (
    Filters, Grouping, NO_GROUP, Section, build_sections, sections_to_dict
)

ORDERS = {
    "category": ["Clothes", "Toiletries", "Documents"],
    "location": ["Bedroom", "Bathroom"],
    "group": ["Night before", "Morning"],
}


def _names(items):
    return [i.name for i in items]


class TestSectionBuilder(unittest.TestCase):

    def setUp(self):
        self.items = [
            Item("Socks", "Clothes", "Bedroom", group=""),
            Item("Toothbrush", "Toiletries", "Bathroom", group="Morning", is_packed=True),
            Item("Shirt", "Clothes", "Bedroom", group="Night before", is_packed=True),
            Item("Passport", "Documents", "Bedroom", group="Night before"),
            Item("Jeans", "Clothes", "Bedroom", group="Night before"),
            Item("Drill", "Tools", "Garage"),
            Item("Kite", "Beach", "Attic", is_packed=True),
        ]

    def test_nested_category_then_location_example(self):
        socks = Item("Socks", "Clothes", "Bedroom", group="")
        passport = Item("Passport", "Documents", "Bedroom", is_packed=True)
        orders = {"category": ["Clothes", "Documents"], "location": ["Bedroom"]}
        sections = build_sections([socks, passport], Grouping.nested("category", "location"), orders=orders)
        self.assertEqual(sections, [
            ("Clothes", [("Bedroom", [socks])]),
            ("Documents", [("Bedroom", [passport])]),
        ])

    def test_single_location_canonical_then_orphans(self):
        sections = build_sections(self.items, Grouping.single("location"), orders=ORDERS)
        self.assertEqual([s.key for s in sections], ["Bedroom", "Bathroom", "Attic", "Garage"])

    def test_orphans_sorted_after_canonical(self):
        sections = build_sections(self.items, Grouping.single("category"), orders=ORDERS)
        self.assertEqual([s.key for s in sections], ["Clothes", "Toiletries", "Documents", "Beach", "Tools"])

    def test_unpacked_before_packed_stable(self):
        sections = build_sections(self.items, Grouping.single("category"), orders=ORDERS)
        clothes = sections[0]
        self.assertEqual(_names(clothes.entries), ["Socks", "Jeans", "Shirt"])

    def test_pack_order_invariant_everywhere(self):
        for grouping in (Grouping.flat(), Grouping.single("location"),
                         Grouping.nested("location", "category"), Grouping.nested("category", "group")):
            for section in build_sections(self.items, grouping, orders=ORDERS):
                leaves = section.entries if section.is_nested else [section]
                for leaf in leaves:
                    flags = [i.is_packed for i in leaf.entries]
                    self.assertEqual(flags, sorted(flags))

    def test_no_empty_groups(self):
        filters = Filters(location="Bedroom")
        sections = build_sections(self.items, Grouping.nested("category", "location"), filters, ORDERS)
        for section in sections:
            self.assertTrue(section.entries)
            for sub in section.entries:
                self.assertTrue(sub.entries)
        self.assertEqual([s.key for s in sections], ["Clothes", "Documents"])

    def test_filter_by_group(self):
        sections = build_sections(self.items, Grouping.single("category"), Filters(group="Night before"), ORDERS)
        self.assertEqual([(s.key, _names(s.entries)) for s in sections],
                         [("Clothes", ["Jeans", "Shirt"]), ("Documents", ["Passport"])])

    def test_filter_no_group_bucket(self):
        sections = build_sections(self.items, Grouping.flat(), Filters(group=NO_GROUP), ORDERS)
        self.assertEqual(len(sections), 1)
        self.assertEqual(_names(sections[0].entries), ["Socks", "Drill", "Kite"])

    def test_empty_filter_values_mean_no_restriction(self):
        all_sections = build_sections(self.items, Grouping.flat())
        filtered = build_sections(self.items, Grouping.flat(), Filters(group="", location=None))
        self.assertEqual(all_sections, filtered)
        self.assertEqual(len(filtered[0].entries), len(self.items))

    def test_filters_combine_with_and(self):
        sections = build_sections(self.items, Grouping.flat(), Filters(group="Night before", location="Garage"))
        self.assertEqual(sections, [])

    def test_grouping_is_case_sensitive(self):
        items = [Item("A", "Clothes", "bedroom"), Item("B", "Clothes", "Bedroom")]
        sections = build_sections(items, Grouping.single("location"), orders=ORDERS)
        self.assertEqual([s.key for s in sections], ["Bedroom", "bedroom"])

    def test_deterministic_and_idempotent(self):
        grouping = Grouping.nested("location", "category")
        first = build_sections(self.items, grouping, orders=ORDERS)
        second = build_sections(self.items, grouping, orders=ORDERS)
        self.assertEqual(first, second)
        self.assertEqual(sections_to_dict(first), sections_to_dict(second))

    def test_input_list_not_mutated(self):
        before = list(self.items)
        build_sections(self.items, Grouping.single("category"), orders=ORDERS)
        self.assertEqual(before, self.items)

    def test_missing_orders_sorts_everything_lexicographically(self):
        sections = build_sections(self.items, Grouping.single("location"))
        self.assertEqual([s.key for s in sections], ["Attic", "Bathroom", "Bedroom", "Garage"])

    def test_group_tier_with_ungrouped_bucket(self):
        sections = build_sections(self.items, Grouping.single("group"), orders=ORDERS)
        self.assertEqual([s.key for s in sections], ["Night before", "Morning", ""])

    def test_flat_on_empty_input(self):
        self.assertEqual(build_sections([], Grouping.flat()), [])

    def test_invalid_groupings(self):
        with self.assertRaises(ValueError):
            Grouping.single("container")
        with self.assertRaises(ValueError):
            Grouping.nested("category", "category")
        with self.assertRaises(ValueError):
            Grouping.from_mode("colour")

    def test_from_mode(self):
        self.assertEqual(Grouping.from_mode("location"), Grouping.single("location"))
        self.assertEqual(Grouping.from_mode("nested"), Grouping.nested("category", "location"))
        self.assertEqual(Grouping.from_mode("location-category"), Grouping.nested("location", "category"))
        self.assertEqual(Grouping.from_mode("FLAT"), Grouping.flat())

    def test_sections_to_dict(self):
        sections = build_sections(self.items, Grouping.nested("category", "location"), orders=ORDERS)
        data = sections_to_dict(sections)
        self.assertEqual(data[0]["key"], "Clothes")
        self.assertEqual(data[0]["count"], 3)
        self.assertEqual(data[0]["packed"], 1)
        self.assertEqual(data[0]["sections"][0]["key"], "Bedroom")
        self.assertEqual([i["name"] for i in data[0]["sections"][0]["items"]], ["Socks", "Jeans", "Shirt"])

    def test_section_helpers(self):
        section = Section("Clothes", [Section("Bedroom", [self.items[0], self.items[2]])])
        self.assertTrue(section.is_nested)
        self.assertEqual(section.item_count, 2)
        self.assertEqual(section.packed_count, 1)
