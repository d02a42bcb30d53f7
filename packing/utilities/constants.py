from typing import Final

COPY_PREFIX: Final[str] = "Copy of "

# Vocabulary kinds double as the Item field they are referenced from
CATEGORY: Final[str] = "category"
LOCATION: Final[str] = "location"
GROUP: Final[str] = "group"
VOCABULARY_KINDS: Final[tuple] = (CATEGORY, LOCATION, GROUP)
VOCABULARY_TITLES: Final[dict[str, str]] = {
    CATEGORY: "Categories",
    LOCATION: "Locations",
    GROUP: "Pack times",
}

DEFAULT_CATEGORIES: Final[tuple] = ("Clothes", "Toiletries", "Tech", "Documents", "Misc")
DEFAULT_LOCATIONS: Final[tuple] = ("Bedroom", "Bathroom", "Kitchen", "Living Room", "Garage", "Basement")

MAX_EVENTS: Final[int] = 300
