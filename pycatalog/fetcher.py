"""
Generic fetch-and-cache loops for remote catalogs.

Two shapes of catalog are supported:

    SequentialCatalog - items addressed by integer ID (1, 2, 3, ...)
    PagedCatalog      - items returned a page at a time (?page=1, 2, ...)

Both loops are strictly sequential and sleep a fixed delay after every remote
request, successful or not, to bound the request rate against the upstream API.
Every fetched item is written to the DiskCache before it is added to the result.
Nothing is retried: a failed request is logged and treated as an absent item.
"""
import logging
import time
from typing import Any, Callable, List, Optional, Tuple

from pycatalog.cache import DiskCache
from pycatalog.client import CatalogClient
from pycatalog.exceptions import NotFound, FetchError

log = logging.getLogger(__name__)

DEFAULT_DELAY = 1.0  # seconds between remote requests

# Lookup outcomes
CACHED = "cached"
FETCHED = "fetched"
MISSING = "missing"
FAILED = "failed"


def _id_order(key: str) -> Tuple[int, Any]:
    try:
        return 0, int(key)
    except ValueError:
        return 1, key


class SequentialCatalog(object):
    """
    Catalog addressed by sequential integer ID.

    Args:
        client     = CatalogClient used for remote requests
        cache      = DiskCache holding normalized records
        section    = Cache section for this catalog (e.g. "pokemon")
        url        = URL template with an {id} placeholder
        normalize  = Function turning a raw payload into the cached record
        delay      = Seconds to sleep after each remote request
        limit      = None to stop at the first absent ID, or the last ID to walk
                     (absent IDs are then skipped instead of ending the walk)
        authenticated = Forward the shared API key header
    """

    def __init__(self, client: CatalogClient, cache: DiskCache, section: str, url: str,
                 normalize: Callable[[Any], Any], delay: float = DEFAULT_DELAY,
                 limit: Optional[int] = None, authenticated: bool = False,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.cache = cache
        self.section = section
        self.url = url
        self.normalize = normalize
        self.delay = delay
        self.limit = limit
        self.authenticated = authenticated
        self.sleep = sleep

    def _lookup(self, item_id: int) -> Tuple[Optional[Any], str]:
        cached = self.cache.get(self.section, item_id)
        if cached is not None:
            log.debug(f"Using cached {self.section} data for ID {item_id}")
            return cached, CACHED

        url = self.url.format(id=item_id)
        try:
            payload = self.client.get_json(url, authenticated=self.authenticated)
            record = self.normalize(payload)
        except NotFound:
            log.debug(f"{self.section} {item_id} not found")
            return None, MISSING
        except FetchError as exc:
            log.warning(f"Error fetching {self.section} {item_id}: {exc.reason}")
            return None, FAILED
        except (KeyError, TypeError, AttributeError) as exc:
            log.warning(f"Unexpected payload for {self.section} {item_id}: {exc!r}")
            return None, FAILED

        self.cache.put(self.section, item_id, record)
        return record, FETCHED

    def get(self, item_id: int) -> Optional[Any]:
        """Return one record, from the cache when present, otherwise from the remote catalog."""
        record, _ = self._lookup(item_id)
        return record

    def cached(self) -> List[Any]:
        """Cached records in ascending ID order, without any remote request."""
        return [record for _, record in sorted(self.cache.items(self.section), key=lambda kv: _id_order(kv[0]))]

    def _walk(self, start: int, end: Optional[int], stop_on_absent: bool) -> List[Any]:
        results = []
        item_id = start
        while end is None or item_id <= end:
            log.debug(f"Fetching {self.section} {item_id}...")
            record, outcome = self._lookup(item_id)
            if outcome != CACHED:
                self.sleep(self.delay)
            if record is not None:
                results.append(record)
            elif stop_on_absent:
                if outcome == FAILED:
                    # A transient failure ends the backfill exactly like a 404 does
                    log.warning(f"Stopping {self.section} backfill at ID {item_id} after a failed request")
                break
            item_id += 1
        return results

    def fetch_all(self) -> List[Any]:
        """Backfill the whole catalog in ascending ID order."""
        if self.limit is None:
            results = self._walk(1, None, stop_on_absent=True)
        else:
            results = self._walk(1, self.limit, stop_on_absent=False)
        log.info(f"Fetched {len(results)} {self.section} record(s)")
        return results

    def fetch_range(self, start: int, end: int) -> List[Any]:
        """Fetch IDs start..end inclusive, skipping absent ones."""
        return self._walk(start, end, stop_on_absent=False)


class PagedCatalog(object):
    """
    Catalog returned one page (a JSON list) at a time.

    Args:
        pages = Number of pages to request, or None to stop at the first empty page
        key   = Item field used as the cache key (falls back to "#<position>")
    """

    def __init__(self, client: CatalogClient, cache: DiskCache, section: str, url: str,
                 pages: Optional[int], delay: float = DEFAULT_DELAY, key: str = "id",
                 authenticated: bool = True, sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.cache = cache
        self.section = section
        self.url = url
        self.pages = pages
        self.delay = delay
        self.key = key
        self.authenticated = authenticated
        self.sleep = sleep

    def fetch_page(self, page: int) -> List[Any]:
        try:
            items = self.client.get_json(self.url, params={"page": page}, authenticated=self.authenticated)
        except (NotFound, FetchError) as exc:
            log.warning(f"Error fetching {self.section} page {page}: {exc}")
            return []
        if not isinstance(items, list):
            log.warning(f"Unexpected payload for {self.section} page {page}: {type(items).__name__}")
            return []
        return items

    def fetch_all(self) -> List[Any]:
        results = []
        page = 1
        while self.pages is None or page <= self.pages:
            log.debug(f"Fetching {self.section} page {page}...")
            items = self.fetch_page(page)
            for item in items:
                key = item.get(self.key) if isinstance(item, dict) else None
                if key is None:
                    # "#<n>" cannot collide with a real id
                    key = f"#{len(results)}"
                self.cache.put(self.section, key, item)
                results.append(item)
            self.sleep(self.delay)
            if self.pages is None and not items:
                break
            page += 1
        log.info(f"Fetched {len(results)} {self.section} record(s)")
        return results
