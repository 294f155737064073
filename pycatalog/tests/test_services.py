"""Tests for the domain services over a stub client."""
import threading

from pycatalog.cache import DiskCache
from pycatalog.fetcher import PagedCatalog, SequentialCatalog
from pycatalog.oracle import Oracle
from pycatalog.pokemon import Pokedex, normalize_pokemon
from pycatalog.stars import StarsService
from pycatalog.starwars import StarWarsService, normalize_person, normalize_planet

from conftest import ORACLE_URL, PEOPLE_URL, PLANETS_URL, POKEMON_URL, STARS_URL, StubClient, request_key


def stars_service(responses, cache, pages=2):
    catalog = PagedCatalog(StubClient(responses), cache, "stars", STARS_URL, pages=pages, delay=0,
                           sleep=lambda s: None)
    return StarsService(catalog, cache)


def test_stars_summary():
    responses = {
        request_key(STARS_URL, {"page": 1}): [{"id": "a", "resonance": 10}, {"id": "b", "resonance": 20}],
        request_key(STARS_URL, {"page": 2}): [{"id": "c", "resonance": 30}],
    }
    cache = DiskCache(None, ["stars"])

    summary = stars_service(responses, cache).summary()

    assert summary["totalStars"] == 3
    assert summary["totalResonance"] == 60
    assert summary["averageResonance"] == 20
    assert cache.is_valid()


def test_stars_served_from_valid_cache():
    cache = DiskCache(None, ["stars"])
    cache.put("stars", "a", {"id": "a", "resonance": 4})
    cache.mark_refreshed()
    service = stars_service({}, cache)

    assert service.summary()["totalResonance"] == 4
    assert service.catalog.client.calls == []


def test_stars_empty_fetch_does_not_mark_refresh():
    cache = DiskCache(None, ["stars"])
    summary = stars_service({}, cache).summary()
    assert summary["totalStars"] == 0
    assert summary["averageResonance"] == 0
    assert not cache.is_valid()


def pokedex(responses, cache):
    catalog = SequentialCatalog(StubClient(responses), cache, "pokemon", POKEMON_URL, normalize_pokemon,
                                delay=0, sleep=lambda s: None)
    return Pokedex(catalog, cache)


def test_pokedex_heights_backfills_then_uses_cache(pokemon_responses):
    cache = DiskCache(None, ["pokemon"])
    dex = pokedex(pokemon_responses, cache)

    heights = dex.heights()["heights"]
    calls = len(dex.catalog.client.calls)
    again = dex.heights()["heights"]

    assert heights["grass"] == 12.333
    assert heights["poison"] == 12.333
    assert heights["fire"] == 0
    assert again == heights
    assert calls == 4
    assert len(dex.catalog.client.calls) == calls


def test_pokedex_range_skips_missing(pokemon_responses):
    dex = pokedex(pokemon_responses, DiskCache(None, ["pokemon"]))

    result = dex.range(2, 5)

    assert result["total"] == 2
    assert [p["name"] for p in result["pokemon"]] == ["ivysaur", "venusaur"]


def test_pokedex_get(pokemon_responses):
    dex = pokedex(pokemon_responses, DiskCache(None, ["pokemon"]))
    assert dex.get(1) == {"name": "bulbasaur", "height": 7, "types": ["grass", "poison"]}
    assert dex.get(151) is None


def test_starwars_summary(live_manager):
    summary = live_manager.starwars.summary()

    assert summary["totalPeople"] == 3
    assert summary["totalPlanets"] == 3
    assert summary["lightSideCount"] == 2
    assert summary["darkSideCount"] == 1

    planets = {p["name"]: p for p in summary["planets"]}
    assert planets["Tatooine"]["ibf"] == 0
    assert planets["Tatooine"]["lightSideCount"] == 1
    assert planets["Tatooine"]["darkSideCount"] == 1
    assert planets["Alderaan"]["ibf"] == 1.0
    assert planets["Hoth"]["residents"] == []
    assert planets["Hoth"]["ibf"] == 0


def test_starwars_people_are_enriched(live_manager):
    people, _ = live_manager.starwars.collect()

    sides = {p["name"]: p["oracle_data"]["side"] for p in people}
    assert sides == {"Luke Skywalker": "light", "Darth Vader": "dark", "Leia Organa": "light"}


def test_starwars_planets_with_residents(live_manager):
    result = live_manager.starwars.planets_with_residents()

    assert result["totalPlanetsWithResidents"] == 2
    assert sorted(p["name"] for p in result["planets"]) == ["Alderaan", "Tatooine"]
    assert result["lightSideCount"] == 2
    assert result["darkSideCount"] == 1


def test_starwars_second_call_uses_cache(live_manager):
    live_manager.starwars.summary()
    calls = len(live_manager.client.calls)

    summary = live_manager.starwars.summary()

    assert len(live_manager.client.calls) == calls
    assert summary["totalPeople"] == 3
    assert {p["name"]: p["ibf"] for p in summary["planets"]}["Alderaan"] == 1.0


def test_starwars_cache_survives_restart(live_manager, settings):
    live_manager.starwars.summary()

    cache = DiskCache(settings.cache_path("starwars"), ["people", "planets", "oracle"])
    cache.load()

    assert cache.size("people") == 3
    assert cache.size("planets") == 3
    assert cache.get("oracle", "Darth Vader")["side"] == "dark"
    assert cache.is_valid()


class RendezvousClient(StubClient):
    """Blocks the first people and planet requests until both are in flight."""

    def __init__(self, responses, urls):
        super().__init__(responses)
        self.urls = set(urls)
        self.barrier = threading.Barrier(len(self.urls), timeout=5)

    def get_json(self, url, params=None, authenticated=False):
        if url in self.urls:
            self.urls.discard(url)
            self.barrier.wait()
        return super().get_json(url, params=params, authenticated=authenticated)


def test_starwars_backfills_run_concurrently(starwars_responses):
    cache = DiskCache(None, ["people", "planets", "oracle"])
    client = RendezvousClient(starwars_responses, [PEOPLE_URL.format(id=1), PLANETS_URL.format(id=1)])
    service = StarWarsService(
        SequentialCatalog(client, cache, "people", PEOPLE_URL, normalize_person, delay=0, limit=4,
                          sleep=lambda s: None),
        SequentialCatalog(client, cache, "planets", PLANETS_URL, normalize_planet, delay=0, sleep=lambda s: None),
        Oracle(client, cache, ORACLE_URL),
        cache,
    )

    # A sequential collect() leaves the first request waiting alone until the barrier breaks
    people, planets = service.collect()

    assert not client.barrier.broken
    assert len(people) == 3
    assert len(planets) == 3
    assert cache.is_valid()
