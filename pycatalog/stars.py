import logging
from typing import Any, Dict, List

from pycatalog.aggregate import summarize_stars
from pycatalog.cache import DiskCache
from pycatalog.fetcher import PagedCatalog

log = logging.getLogger(__name__)

STARS_PAGES = 34


class StarsService(object):
    """Paged stars resource reduced to total and average resonance."""

    def __init__(self, catalog: PagedCatalog, cache: DiskCache):
        self.catalog = catalog
        self.cache = cache

    def stars(self) -> List[Dict[str, Any]]:
        if self.cache.is_valid():
            log.info("Using cached stars data")
            return self.cache.values(self.catalog.section)
        stars = self.catalog.fetch_all()
        if stars:
            self.cache.mark_refreshed()
        return stars

    def summary(self) -> Dict[str, Any]:
        return summarize_stars(self.stars())
