from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# SWAPI spells missing numbers in a handful of ways
MISSING_NUMBERS = {"", "unknown", "n/a", "none", "indefinite"}


def parse_number(value: object) -> Optional[Union[int, float]]:
    """Convert a SWAPI numeric string such as "1,358" or "unknown" into a number.

    Returns None when the catalog has no usable value.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value

    text = str(value).strip().replace(",", "").lower()
    if text in MISSING_NUMBERS:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


class SwapiRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    created: Optional[str] = None
    edited: Optional[str] = None
    url: Optional[str] = None


class Film(SwapiRecord):
    title: str
    episode_id: Optional[int] = None
    opening_crawl: Optional[str] = None
    director: Optional[str] = None
    producer: Optional[str] = None
    release_date: Optional[str] = None
    characters: List[str] = Field(default_factory=list)
    planets: List[str] = Field(default_factory=list)
    starships: List[str] = Field(default_factory=list)
    vehicles: List[str] = Field(default_factory=list)
    species: List[str] = Field(default_factory=list)


class FilmSearchResult(BaseModel):
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[Film] = Field(default_factory=list)


class Person(SwapiRecord):
    name: Optional[str] = None
    height: Optional[float] = None
    mass: Optional[float] = None
    hair_color: Optional[str] = None
    skin_color: Optional[str] = None
    eye_color: Optional[str] = None
    birth_year: Optional[str] = None
    gender: Optional[str] = None
    homeworld: Optional[str] = None
    films: List[str] = Field(default_factory=list)
    species: List[str] = Field(default_factory=list)
    vehicles: List[str] = Field(default_factory=list)
    starships: List[str] = Field(default_factory=list)

    @field_validator("height", "mass", mode="before")
    @classmethod
    def _parse_measurement(cls, v):
        return parse_number(v)


class Planet(SwapiRecord):
    name: Optional[str] = None
    rotation_period: Optional[float] = None
    orbital_period: Optional[float] = None
    diameter: Optional[float] = None
    climate: Optional[str] = None
    gravity: Optional[str] = None
    terrain: Optional[str] = None
    surface_water: Optional[float] = None
    population: Optional[float] = None
    residents: List[str] = Field(default_factory=list)
    films: List[str] = Field(default_factory=list)

    @field_validator(
        "rotation_period",
        "orbital_period",
        "diameter",
        "surface_water",
        "population",
        mode="before",
    )
    @classmethod
    def _parse_measurement(cls, v):
        return parse_number(v)


class Starship(SwapiRecord):
    name: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    cost_in_credits: Optional[float] = None
    length: Optional[float] = None
    max_atmosphering_speed: Optional[str] = None
    crew: Optional[str] = None
    passengers: Optional[str] = None
    cargo_capacity: Optional[float] = None
    consumables: Optional[str] = None
    hyperdrive_rating: Optional[float] = None
    MGLT: Optional[float] = None
    starship_class: Optional[str] = None
    pilots: List[str] = Field(default_factory=list)
    films: List[str] = Field(default_factory=list)

    @field_validator(
        "cost_in_credits",
        "length",
        "cargo_capacity",
        "hyperdrive_rating",
        "MGLT",
        mode="before",
    )
    @classmethod
    def _parse_measurement(cls, v):
        return parse_number(v)


Asset = Union[Person, Planet, Starship]
