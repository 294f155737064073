"""Pytest configuration and fixtures."""
import base64
import copy

import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from pycatalog.cache import DiskCache
from pycatalog.exceptions import NotFound
from pycatalog.server.config import Settings
from pycatalog.server.core import CatalogManager
from pycatalog.server.main import create_app

POKEMON_URL = "https://pokeapi.test/api/v2/pokemon/{id}"
STARS_URL = "https://stars.test/resources/stars"
PEOPLE_URL = "https://swapi.test/api/people/{id}/"
PLANETS_URL = "https://swapi.test/api/planets/{id}/"
ORACLE_URL = "https://oracle.test/resources/oracle-rolodex"


def request_key(url, params=None):
    if not params:
        return url
    return url + "?" + "&".join(f"{k}={v}" for k, v in sorted(params.items()))


class StubClient:
    """Stands in for CatalogClient: answers from a dict keyed by URL (plus query string).

    Unknown URLs raise NotFound; exception instances stored as values are raised.
    """

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def get_json(self, url, params=None, authenticated=False):
        key = request_key(url, params)
        self.calls.append((key, authenticated))
        result = self.responses.get(key, NotFound(url))
        if isinstance(result, Exception):
            raise result
        return copy.deepcopy(result)

    def close(self):
        pass


def pokemon_payload(name, height, *types):
    return {
        "name": name,
        "height": height,
        "weight": 69,
        "types": [{"slot": i + 1, "type": {"name": t, "url": f"https://pokeapi.test/type/{t}"}}
                  for i, t in enumerate(types)],
    }


def oracle_payload(name, notes):
    return {"name": name, "oracle_notes": base64.b64encode(notes.encode("utf-8")).decode("ascii")}


@pytest.fixture
def sleeps():
    """Records requested delays instead of sleeping."""
    return []


@pytest.fixture
def memory_cache():
    return DiskCache(None, ["pokemon", "stars", "people", "planets", "oracle"])


@pytest.fixture
def pokemon_responses():
    return {
        POKEMON_URL.format(id=1): pokemon_payload("bulbasaur", 7, "grass", "poison"),
        POKEMON_URL.format(id=2): pokemon_payload("ivysaur", 10, "grass", "poison"),
        POKEMON_URL.format(id=3): pokemon_payload("venusaur", 20, "grass", "poison"),
    }


@pytest.fixture
def starwars_responses():
    tatooine = PLANETS_URL.format(id=1)
    alderaan = PLANETS_URL.format(id=2)
    return {
        PEOPLE_URL.format(id=1): {"name": "Luke Skywalker", "homeworld": tatooine, "url": PEOPLE_URL.format(id=1)},
        PEOPLE_URL.format(id=3): {"name": "Darth Vader", "homeworld": tatooine, "url": PEOPLE_URL.format(id=3)},
        PEOPLE_URL.format(id=4): {"name": "Leia Organa", "homeworld": alderaan, "url": PEOPLE_URL.format(id=4)},
        tatooine: {"name": "Tatooine", "url": tatooine, "climate": "arid", "population": "200000"},
        alderaan: {"name": "Alderaan", "url": alderaan, "climate": "temperate", "population": "2000000000"},
        PLANETS_URL.format(id=3): {"name": "Hoth", "url": PLANETS_URL.format(id=3), "climate": "frozen",
                                   "population": "unknown"},
        request_key(ORACLE_URL, {"name": "Luke Skywalker"}):
            oracle_payload("Luke Skywalker", "A farm boy who embraced the Light Side of the Force."),
        request_key(ORACLE_URL, {"name": "Darth Vader"}):
            oracle_payload("Darth Vader", "Seduced by the DARK SIDE."),
        request_key(ORACLE_URL, {"name": "Leia Organa"}):
            oracle_payload("Leia Organa", "Leader of the rebellion, a beacon of the light side."),
    }


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=str(tmp_path / "data"),
        request_delay=0,
        api_key="TEST_KEY",
        pokemon_url=POKEMON_URL,
        stars_url=STARS_URL,
        stars_pages=2,
        people_url=PEOPLE_URL,
        planets_url=PLANETS_URL,
        people_limit=4,
        oracle_url=ORACLE_URL,
    )


@pytest.fixture
def mock_manager():
    """CatalogManager whose services are mocks."""
    manager = CatalogManager()
    manager.stars = Mock()
    manager.pokedex = Mock()
    manager.starwars = Mock()
    return manager


@pytest.fixture
def client(settings, mock_manager):
    """FastAPI test client backed by mocked services."""
    app = create_app(settings=settings, manager=mock_manager)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def live_manager(settings, pokemon_responses, starwars_responses):
    """CatalogManager wired to real services over a StubClient."""
    responses = dict(pokemon_responses)
    responses.update(starwars_responses)
    manager = CatalogManager()
    manager.initialize(settings, client=StubClient(responses))
    yield manager
    manager.shutdown()
