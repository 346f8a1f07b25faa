"""
The fixed table of items stored in a DE ephemeris file.

Component counts and the set of items that report rates are format
constants; neither is recorded in the file itself.
"""

import numbers
from enum import Enum
from typing import Tuple

from .errors import InvalidArgument, ItemNotFound

MIN_ITEM_ID = 0
MAX_ITEM_ID = 14


class Item(Enum):
    """Items 0-14 in file order."""

    MERCURY = 0
    VENUS = 1
    EARTH_MOON_BARYCENTER = 2
    MARS = 3
    JUPITER = 4
    SATURN = 5
    URANUS = 6
    NEPTUNE = 7
    PLUTO = 8
    MOON = 9
    SUN = 10
    NUTATIONS = 11
    LUNAR_LIBRATIONS = 12
    LUNAR_MANTLE_ANGULAR_VELOCITY = 13
    TT_MINUS_TDB = 14

    @property
    def component_count(self) -> int:
        return COMPONENT_COUNTS[self.value]

    @property
    def has_rates(self) -> bool:
        return self.value in RATE_ITEMS


# Number of vector components for items 0-14
COMPONENT_COUNTS: Tuple[int, ...] = (3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 2, 3, 3, 1)

# Items whose time derivative is reported alongside the value.
# 13 and 14 never report one.
RATE_ITEMS = frozenset(range(0, 13))


def validate_item_id(item_id: int) -> int:
    """Check that an item index lies in [0, 14].

    Raises:
        InvalidArgument: If the item is neither an int nor an Item
        ItemNotFound: If the index is outside the table
    """
    if isinstance(item_id, Item):
        return item_id.value
    if isinstance(item_id, bool) or not isinstance(item_id, numbers.Integral):
        raise InvalidArgument(f"item {item_id!r} is not an integer")
    item_id = int(item_id)
    if item_id < MIN_ITEM_ID or item_id > MAX_ITEM_ID:
        raise ItemNotFound(f"item {item_id} is outside [{MIN_ITEM_ID}, {MAX_ITEM_ID}]")
    return item_id


def component_count(item_id: int) -> int:
    return COMPONENT_COUNTS[validate_item_id(item_id)]


def has_rates(item_id: int) -> bool:
    return validate_item_id(item_id) in RATE_ITEMS


def parse_item(text: str) -> int:
    """Parse an item given as an integer literal or an Item name.

    Integer literals follow Python's base-prefix rules, so "0x2" and "2"
    both select the Earth-Moon barycenter. Names are case-insensitive and may
    use dashes in place of underscores.

    Args:
        text: The command-line text naming the item

    Returns:
        The item index

    Raises:
        InvalidArgument: If the text is neither an integer nor an item name
        ItemNotFound: If the integer lies outside [0, 14]
    """
    stripped = text.strip()
    try:
        item_id = int(stripped, 0)
    except ValueError:
        key = stripped.upper().replace("-", "_")
        try:
            return Item[key].value
        except KeyError:
            raise InvalidArgument(f"unknown item {text!r}")
    return validate_item_id(item_id)
