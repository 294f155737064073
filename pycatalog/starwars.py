"""
Star Wars people and planets joined with oracle notes.

People and planets are backfilled from SWAPI in two worker threads running side by
side; each backfill stays strictly sequential. Every person is enriched with the
oracle record for its name and planets are scored with the IBF
((light - dark) / residents).
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Tuple

from pycatalog.aggregate import count_sides, organize_people_by_planet, planets_with_residents
from pycatalog.cache import DiskCache
from pycatalog.fetcher import SequentialCatalog
from pycatalog.oracle import Oracle

log = logging.getLogger(__name__)

MAX_PEOPLE = 83  # SWAPI people IDs have holes (17 is missing), so walk a fixed range


def normalize_person(payload: dict) -> Dict[str, Any]:
    return {
        "name": payload["name"],
        "homeworld": payload["homeworld"],
        "url": payload.get("url"),
    }


def normalize_planet(payload: dict) -> Dict[str, Any]:
    return {
        "name": payload["name"],
        "url": payload["url"],
        "climate": payload.get("climate"),
        "population": payload.get("population"),
    }


class StarWarsService(object):

    def __init__(self, people: SequentialCatalog, planets: SequentialCatalog, oracle: Oracle, cache: DiskCache):
        self.people = people
        self.planets = planets
        self.oracle = oracle
        self.cache = cache

    def enrich(self, person: dict) -> dict:
        oracle_data = self.oracle.lookup(person["name"])
        if oracle_data is None:
            return dict(person)
        return dict(person, oracle_data=oracle_data)

    def enriched_people(self, people: List[dict]) -> List[dict]:
        return [self.enrich(p) for p in people]

    def _backfill_people(self) -> List[dict]:
        return self.enriched_people(self.people.fetch_all())

    def collect(self) -> Tuple[List[dict], List[dict]]:
        """Return (enriched people, planets), refreshing both catalogs when the cache is stale."""
        if self.cache.is_valid():
            log.info("Using cached Star Wars data")
            return self.enriched_people(self.people.cached()), self.planets.cached()

        log.info("Starting to fetch Star Wars data...")
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="pycatalog-starwars") as executor:
            people_future = executor.submit(self._backfill_people)
            planets_future = executor.submit(self.planets.fetch_all)
            people = people_future.result()
            planets = planets_future.result()
        if people or planets:
            self.cache.mark_refreshed()
        return people, planets

    def summary(self) -> Dict[str, Any]:
        people, planets = self.collect()
        result = {
            "totalPeople": len(people),
            "totalPlanets": len(planets),
        }
        result.update(count_sides(people))
        result["planets"] = organize_people_by_planet(people, planets)
        return result

    def planets_with_residents(self) -> Dict[str, Any]:
        people, planets = self.collect()
        inhabited = planets_with_residents(organize_people_by_planet(people, planets))
        result = {"totalPlanetsWithResidents": len(inhabited)}
        result.update(count_sides(people))
        result["planets"] = inhabited
        return result
