import logging
from typing import Any, Dict, List, Optional

from pycatalog.aggregate import average_heights_by_type
from pycatalog.cache import DiskCache
from pycatalog.fetcher import SequentialCatalog

log = logging.getLogger(__name__)


def normalize_pokemon(payload: dict) -> Dict[str, Any]:
    """Keep only the fields we aggregate on: name, height (decimetres) and type names."""
    return {
        "name": payload["name"],
        "height": payload["height"],
        "types": [t["type"]["name"] for t in payload["types"]],
    }


class Pokedex(object):

    def __init__(self, catalog: SequentialCatalog, cache: DiskCache):
        self.catalog = catalog
        self.cache = cache

    def get(self, pokemon_id: int) -> Optional[Dict[str, Any]]:
        return self.catalog.get(pokemon_id)

    def range(self, start: int, end: int) -> Dict[str, Any]:
        pokemon = self.catalog.fetch_range(start, end)
        return {"total": len(pokemon), "pokemon": pokemon}

    def all(self) -> List[Dict[str, Any]]:
        """Every pokemon, from the cache while it is valid, otherwise through a full backfill."""
        if self.cache.is_valid():
            log.info("Using cached pokemon data")
            return self.catalog.cached()
        pokemon = self.catalog.fetch_all()
        if pokemon:
            self.cache.mark_refreshed()
        return pokemon

    def heights(self) -> Dict[str, Dict[str, float]]:
        return average_heights_by_type(self.all())
