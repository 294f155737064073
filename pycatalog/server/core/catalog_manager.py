"""
Catalog Manager - Owns the caches and catalog services of the server.

Built once in the application lifespan and stored on ``app.state.catalogs``; routes
reach it through the ``get_catalogs`` dependency. Nothing lives in module globals.

Architecture:
    - One CatalogClient (requests.Session) shared by every catalog
    - One DiskCache per domain, loaded from disk at startup:
        stars     -> <data_dir>/stars_cache.json     (section "stars")
        pokemon   -> <data_dir>/pokemon_cache.json   (section "pokemon") + pokemon_data.csv
        starwars  -> <data_dir>/starwars_cache.json  (sections "people", "planets", "oracle")
    - Domain services (StarsService, Pokedex, StarWarsService) built on top

Blocking Calls:
    The library is synchronous (requests + sleep between requests). Routes hand every
    call to ``call()``, which runs it in a dedicated thread pool so a backfill that takes
    minutes never blocks the event loop. A cold-cache request still waits for the whole
    backfill; there is no cancellation.

Thread Safety:
    Concurrent requests may drive the same cache from several pool threads. Each
    DiskCache serializes mutation plus persistence on its own writer lock.
"""
import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from fastapi import Request

from pycatalog.cache import DiskCache
from pycatalog.client import CatalogClient
from pycatalog.export import pokemon_csv_exporter
from pycatalog.fetcher import PagedCatalog, SequentialCatalog
from pycatalog.oracle import Oracle
from pycatalog.pokemon import Pokedex, normalize_pokemon
from pycatalog.stars import StarsService
from pycatalog.starwars import StarWarsService, normalize_person, normalize_planet
from pycatalog.server.config import Settings

logger = logging.getLogger(__name__)


class CatalogManager:
    """Holds the shared client, the per-domain caches and the catalog services."""

    def __init__(self):
        self.client: Optional[CatalogClient] = None
        self.caches: Dict[str, DiskCache] = {}
        self.stars: Optional[StarsService] = None
        self.pokedex: Optional[Pokedex] = None
        self.starwars: Optional[StarWarsService] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def initialized(self) -> bool:
        return self.client is not None

    def initialize(self, settings: Settings, client: Optional[CatalogClient] = None) -> None:
        """Build caches and services from settings and load every cache from disk."""
        self.client = client or CatalogClient(api_key=settings.api_key, timeout=settings.timeout,
                                              poolmaxsize=settings.pool_maxsize)
        delay = settings.request_delay
        cache_kwargs = {"ttl": settings.cache_ttl, "lock_timeout": settings.lock_timeout}

        stars_cache = DiskCache(settings.cache_path("stars"), ["stars"], **cache_kwargs)
        pokemon_cache = DiskCache(settings.cache_path("pokemon"), ["pokemon"],
                                  exporters=[pokemon_csv_exporter(settings.csv_path)], **cache_kwargs)
        starwars_cache = DiskCache(settings.cache_path("starwars"), ["people", "planets", "oracle"],
                                   **cache_kwargs)
        self.caches = {"stars": stars_cache, "pokemon": pokemon_cache, "starwars": starwars_cache}
        for cache in self.caches.values():
            cache.load()

        self.stars = StarsService(
            PagedCatalog(self.client, stars_cache, "stars", settings.stars_url,
                         pages=settings.stars_pages, delay=delay),
            stars_cache,
        )
        self.pokedex = Pokedex(
            SequentialCatalog(self.client, pokemon_cache, "pokemon", settings.pokemon_url,
                              normalize_pokemon, delay=delay),
            pokemon_cache,
        )
        self.starwars = StarWarsService(
            SequentialCatalog(self.client, starwars_cache, "people", settings.people_url,
                              normalize_person, delay=delay, limit=settings.people_limit),
            SequentialCatalog(self.client, starwars_cache, "planets", settings.planets_url,
                              normalize_planet, delay=delay),
            Oracle(self.client, starwars_cache, settings.oracle_url, delay=delay),
            starwars_cache,
        )

        self._executor = ThreadPoolExecutor(max_workers=10, thread_name_prefix="pycatalog")
        logger.info(f"Catalog manager ready - caches in {settings.data_dir}")

    async def call(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking catalog call in the worker pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args))

    def cache_status(self) -> Dict[str, Dict[str, Any]]:
        status = {}
        for name, cache in self.caches.items():
            status[name] = {
                "entries": {s: cache.size(s) for s in cache.sections},
                "lastFetch": cache.last_fetch,
                "valid": cache.is_valid(),
            }
        return status

    def shutdown(self) -> None:
        if self._executor:
            self._executor.shutdown(wait=False)
            self._executor = None
        if self.client:
            self.client.close()
        logger.info("Catalog manager shutdown complete")


def get_catalogs(request: Request) -> CatalogManager:
    """FastAPI dependency returning the manager built at startup."""
    return request.app.state.catalogs
