import unittest
from packing.domain.Item import Item
from packing.domain.Trip import Trip
from packing.infra.pdf_utils import generate_pdf_for_trip
from packing.logic.sections.section_builder import Grouping, build_sections


class TestTripPdf(unittest.TestCase):

    def test_nested_sections_render(self):
        trip = Trip("Rome & <Naples>")
        trip.add_item(Item("Socks", "Clothes", "Bedroom", container="Bag"))
        trip.add_item(Item("Passport", "Documents", "Bedroom", is_packed=True, is_optional=True))
        sections = build_sections(trip.items, Grouping.nested("category", "location"))
        pdf = generate_pdf_for_trip(trip, sections)
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_empty_trip_renders(self):
        pdf = generate_pdf_for_trip(Trip("Empty"), [])
        self.assertTrue(pdf.startswith(b"%PDF"))
