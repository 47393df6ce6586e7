"""Asset kinds, category dispatch, and name-keyed string attribute access.

Each asset kind has an explicit table of the attributes that hold strings.
Validation is a lookup in that table, so an attribute that is numeric
(``mass`` on a person) or a list of references (``films``) is rejected
before any request is made.
"""

from __future__ import annotations

from enum import Enum
from operator import attrgetter
from typing import Callable, Dict, List, Optional, Tuple

from exceptions import InvalidAttributeError, UnknownCategoryError
from models import Asset, Film


class AssetKind(str, Enum):
    PERSON = "person"
    PLANET = "planet"
    STARSHIP = "starship"

    @property
    def label(self) -> str:
        if self is AssetKind.PERSON:
            return "People"
        if self is AssetKind.PLANET:
            return "Planet"
        if self is AssetKind.STARSHIP:
            return "Starship"
        raise AssertionError(f"Unhandled asset kind: {self}")


class Category(str, Enum):
    CHARACTERS = "characters"
    PLANETS = "planets"
    STARSHIPS = "starships"

    @classmethod
    def parse(cls, keyword: str) -> "Category":
        for category in cls:
            if category.value == keyword:
                return category
        valid = ", ".join(c.value for c in cls)
        raise UnknownCategoryError(
            f"The asset type of '{keyword}' is not a valid asset type on a film. "
            f"Choose one of: {valid}."
        )

    @property
    def kind(self) -> AssetKind:
        if self is Category.CHARACTERS:
            return AssetKind.PERSON
        if self is Category.PLANETS:
            return AssetKind.PLANET
        if self is Category.STARSHIPS:
            return AssetKind.STARSHIP
        raise AssertionError(f"Unhandled category: {self}")

    def references(self, film: Film) -> List[str]:
        if self is Category.CHARACTERS:
            return list(film.characters)
        if self is Category.PLANETS:
            return list(film.planets)
        if self is Category.STARSHIPS:
            return list(film.starships)
        raise AssertionError(f"Unhandled category: {self}")


Accessor = Callable[[Asset], Optional[str]]

COMMON_STRING_ATTRIBUTES: Tuple[str, ...] = ("created", "edited", "url")

PERSON_STRING_ATTRIBUTES: Tuple[str, ...] = (
    "name",
    "hair_color",
    "skin_color",
    "eye_color",
    "birth_year",
    "gender",
    "homeworld",
) + COMMON_STRING_ATTRIBUTES

PLANET_STRING_ATTRIBUTES: Tuple[str, ...] = (
    "name",
    "climate",
    "gravity",
    "terrain",
) + COMMON_STRING_ATTRIBUTES

STARSHIP_STRING_ATTRIBUTES: Tuple[str, ...] = (
    "name",
    "model",
    "manufacturer",
    "max_atmosphering_speed",
    "crew",
    "passengers",
    "consumables",
    "starship_class",
) + COMMON_STRING_ATTRIBUTES


def _accessor_table(names: Tuple[str, ...]) -> Dict[str, Accessor]:
    return {name: attrgetter(name) for name in names}


_ACCESSORS: Dict[AssetKind, Dict[str, Accessor]] = {
    AssetKind.PERSON: _accessor_table(PERSON_STRING_ATTRIBUTES),
    AssetKind.PLANET: _accessor_table(PLANET_STRING_ATTRIBUTES),
    AssetKind.STARSHIP: _accessor_table(STARSHIP_STRING_ATTRIBUTES),
}


def string_attributes(kind: AssetKind) -> List[str]:
    """Return the attribute names of ``kind`` that can be retrieved."""
    return list(_ACCESSORS[kind])


def validate_attribute(kind: AssetKind, attribute: str) -> Accessor:
    """Check that ``attribute`` is a string field of ``kind``.

    Returns:
        the accessor for the attribute

    Raises:
        InvalidAttributeError: if the attribute is unknown or not a string
    """
    accessor = _ACCESSORS[kind].get(attribute)
    if accessor is None:
        raise InvalidAttributeError(
            f"The property value of '{attribute}' does not exist as a string "
            f"on the {kind.label} type."
        )
    return accessor


def extract_attribute(
    kind: AssetKind, asset: Optional[Asset], attribute: str
) -> Optional[str]:
    """Read a string attribute from a fetched asset, or None if there is nothing to read."""
    if asset is None:
        return None

    accessor = _ACCESSORS[kind].get(attribute)
    if accessor is None:
        return None

    try:
        value = accessor(asset)
    except AttributeError:
        return None

    if not isinstance(value, str):
        return None
    return value


def extractor_for(kind: AssetKind, attribute: str) -> Callable[[Optional[Asset]], Optional[str]]:
    """Validate once and return a one-argument extractor for the engine."""
    validate_attribute(kind, attribute)

    def extract(asset: Optional[Asset]) -> Optional[str]:
        return extract_attribute(kind, asset, attribute)

    return extract
