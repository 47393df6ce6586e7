"""Pytest fixtures for film asset retrieval tests."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path so we can import the top-level modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Film, Person, Planet, Starship


BASE = "https://swapi.dev/api"


class FakeClient:
    """Stands in for SwapiClient; records every call it receives."""

    def __init__(self, films=None, people=None, planets=None, starships=None):
        self.films = films or []
        self.people = people or {}
        self.planets = planets or {}
        self.starships = starships or {}
        self.searches = []
        self.fetches = []

    def search_films(self, title):
        self.searches.append(title)
        return list(self.films)

    def get_person(self, asset_id):
        self.fetches.append(("person", asset_id))
        return self.people.get(asset_id)

    def get_planet(self, asset_id):
        self.fetches.append(("planet", asset_id))
        return self.planets.get(asset_id)

    def get_starship(self, asset_id):
        self.fetches.append(("starship", asset_id))
        return self.starships.get(asset_id)

    def fetcher_for(self, kind):
        return {
            "person": self.get_person,
            "planet": self.get_planet,
            "starship": self.get_starship,
        }[kind.value]


@pytest.fixture(autouse=True)
def monkeypatch_env(monkeypatch):
    """Monkeypatch environment to silence logging."""
    monkeypatch.setenv("ENV", "test")
    return monkeypatch


@pytest.fixture
def new_hope():
    return Film(
        title="A New Hope",
        episode_id=4,
        characters=[
            f"{BASE}/people/1/",
            f"{BASE}/people/1/",
            f"{BASE}/people/2/",
        ],
        planets=[f"{BASE}/planets/1/", f"{BASE}/planets/2/"],
        starships=[f"{BASE}/starships/2/", f"{BASE}/starships/3/"],
    )


@pytest.fixture
def fake_client(new_hope):
    return FakeClient(
        films=[new_hope],
        people={
            "1": Person(name="Luke", mass="77", eye_color="blue"),
            "2": Person(name="Leia", mass="49", eye_color="brown"),
        },
        planets={
            "1": Planet(name="Tatooine", climate="arid"),
            "2": Planet(name="Alderaan", climate="temperate"),
        },
        starships={
            "2": Starship(name="CR90 corvette", starship_class="corvette"),
            "3": Starship(name="Star Destroyer", starship_class="Star Destroyer"),
        },
    )
