"""First-run seeding of the default categories and locations."""
import logging

from packing.domain.VocabularyEntry import VocabularyEntry
from packing.utilities.constants import CATEGORY, LOCATION, DEFAULT_CATEGORIES, DEFAULT_LOCATIONS

logger = logging.getLogger(__name__)


def seed_if_needed(store) -> bool:
    """Insert the default vocabulary when both category and location registries are empty.

    Guarded by the emptiness check alone, so calling it again never
    duplicates entries. Returns True when anything was inserted.
    """
    if store.load_vocabulary(CATEGORY) or store.load_vocabulary(LOCATION):
        return False
    with store.transaction("seed vocabulary"):
        for index, name in enumerate(DEFAULT_CATEGORIES):
            store.save(VocabularyEntry(name=name, sort_order=index, kind=CATEGORY))
        for index, name in enumerate(DEFAULT_LOCATIONS):
            store.save(VocabularyEntry(name=name, sort_order=index, kind=LOCATION))
    logger.info("Seeded %d categories and %d locations", len(DEFAULT_CATEGORIES), len(DEFAULT_LOCATIONS))
    return True


__all__ = ['seed_if_needed']
