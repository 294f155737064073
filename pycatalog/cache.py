"""
Write-through JSON cache shared by the catalog loops.

File layout (one file per domain)::

    {
      "pokemon": {"1": {"name": "bulbasaur", "height": 7, "types": ["grass", "poison"]}},
      "lastFetch": 1718000000000
    }

Every ``put`` rewrites the whole file under the writer lock, so the file on disk is
never more than one record behind memory. Writes go to ``<path>.tmp`` and are moved
into place, so an interrupted write never truncates the previous file. ``lastFetch``
(epoch millis) records the last completed full refresh and only gates whether the
next full refresh runs.
"""
import json
import logging
import os
import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

from pycatalog.api_lock import uses_writer_lock
from pycatalog.exceptions import CacheIOError

log = logging.getLogger(__name__)

CACHE_DURATION = 24 * 60 * 60  # seconds


class DiskCache(object):

    def __init__(self, path: Optional[str], sections: Iterable[str], ttl: float = CACHE_DURATION,
                 exporters: Iterable[Callable[["DiskCache"], None]] = (), lock_timeout: float = 30,
                 clock: Callable[[], float] = time.time):
        self.path = path  # None keeps the cache in memory only
        self.sections = tuple(sections)
        self.ttl = ttl
        self.exporters = list(exporters)
        self.lock = threading.RLock()
        self.lock_timeout = lock_timeout
        self.clock = clock
        self.data: Dict[str, Dict[str, Any]] = {s: {} for s in self.sections}
        self.last_fetch: Optional[int] = None

    @staticmethod
    def _key(key) -> str:
        # JSON object keys are strings, so 1 and "1" must land on the same entry
        return str(key)

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def load(self) -> None:
        """Read the backing file. A missing file is a cold start, anything else is logged."""
        if not self.path:
            return
        try:
            with open(self.path, "r") as f:
                payload = json.load(f)
            data = {s: dict(payload.get(s) or {}) for s in self.sections}
            last_fetch = payload.get("lastFetch")
        except FileNotFoundError:
            log.debug(f"No cache file at {self.path} - cold start")
            return
        except (OSError, ValueError, AttributeError, TypeError) as exc:
            log.error(f"Error loading cache {self.path}: {exc}")
            return
        if last_fetch is not None and (isinstance(last_fetch, bool) or not isinstance(last_fetch, (int, float))):
            log.error(f"Ignoring invalid lastFetch {last_fetch!r} in {self.path}")
            last_fetch = None
        with self.lock:
            self.data = data
            self.last_fetch = last_fetch
        log.info(f"Cache loaded from {self.path} ({', '.join('%s=%d' % (s, len(data[s])) for s in self.sections)})")

    def get(self, section: str, key) -> Optional[Any]:
        return self.data[section].get(self._key(key))

    def contains(self, section: str, key) -> bool:
        return self._key(key) in self.data[section]

    def values(self, section: str) -> List[Any]:
        return list(self.data[section].values())

    def items(self, section: str) -> List[tuple]:
        return list(self.data[section].items())

    def size(self, section: str) -> int:
        return len(self.data[section])

    @uses_writer_lock
    def put(self, section: str, key, record: Any) -> None:
        self.data[section][self._key(key)] = record
        self.persist()

    @uses_writer_lock
    def mark_refreshed(self, now: Optional[float] = None) -> None:
        """Record a completed full refresh and persist it."""
        self.last_fetch = int(now * 1000) if now is not None else self._now_ms()
        self.persist()

    def is_valid(self) -> bool:
        if not self.last_fetch:
            return False
        return (self._now_ms() - self.last_fetch) < self.ttl * 1000

    def snapshot(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {s: dict(self.data[s]) for s in self.sections}
        payload["lastFetch"] = self.last_fetch
        return payload

    @uses_writer_lock
    def persist(self) -> None:
        """Serialize the entire cache to disk, then refresh the exports."""
        if not self.path:
            return
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = self.path + ".tmp"
            try:
                with open(tmp_path, "w") as f:
                    json.dump(self.snapshot(), f, indent=2)
                os.replace(tmp_path, self.path)
            except (TypeError, ValueError):
                os.remove(tmp_path)
                raise
            log.debug(f"Cache saved to {self.path}")
        except (OSError, TypeError, ValueError) as exc:
            log.error(f"Error saving cache {self.path}: {exc}")
            return
        for exporter in self.exporters:
            try:
                exporter(self)
            except CacheIOError as exc:
                log.error(f"Error exporting cache {self.path}: {exc}")
