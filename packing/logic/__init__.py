"""Core business logic layer.

Subpackages:
- sections: grouping trip items into ordered view sections
- reporting: packing progress statistics
- seeding: default vocabulary on first run

Sections and reporting are pure over domain objects; seeding writes through a store.
"""
__all__ = ["sections", "reporting", "seeding"]
