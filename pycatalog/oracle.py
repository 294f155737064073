import base64
import binascii
import logging
import time
from typing import Callable, Optional

from pycatalog.cache import DiskCache
from pycatalog.client import CatalogClient
from pycatalog.exceptions import NotFound, FetchError, DecodeError

log = logging.getLogger(__name__)

LIGHT_SIDE = "light side"
DARK_SIDE = "dark side"


def _b64decode(value: str) -> str:
    try:
        return base64.b64decode(value).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, TypeError, ValueError) as exc:
        raise DecodeError(f"invalid base64 notes: {exc}") from exc


def decode_notes(value) -> Optional[str]:
    """Decode base64 oracle notes to text, None if they cannot be decoded."""
    try:
        return _b64decode(value)
    except DecodeError as exc:
        log.error(f"Error decoding oracle notes: {exc}")
        return None


def classify_side(text: Optional[str]) -> Optional[str]:
    # "light side" is checked first and wins when both phrases appear
    if not text:
        return None
    lower_text = text.lower()
    if LIGHT_SIDE in lower_text:
        return "light"
    if DARK_SIDE in lower_text:
        return "dark"
    return None


class Oracle(object):
    """Per-name oracle lookup, cached by exact name without expiry."""

    def __init__(self, client: CatalogClient, cache: DiskCache, url: str, section: str = "oracle",
                 delay: float = 0, sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.cache = cache
        self.url = url
        self.section = section
        self.delay = delay  # seconds to sleep after each remote lookup
        self.sleep = sleep

    def lookup(self, name: str) -> Optional[dict]:
        cached = self.cache.get(self.section, name)
        if cached is not None:
            log.debug(f"Using cached oracle data for {name}")
            return cached

        try:
            payload = self.client.get_json(self.url, params={"name": name}, authenticated=True)
        except (NotFound, FetchError) as exc:
            log.warning(f"Error fetching oracle data for {name}: {exc}")
            return None
        finally:
            if self.delay:
                self.sleep(self.delay)

        notes = payload.get("oracle_notes") if isinstance(payload, dict) else None
        if not notes:
            log.debug(f"No oracle notes for {name}")
            return None
        decoded = decode_notes(notes)
        if decoded is None:
            return None

        record = {
            "name": name,
            "oracle_notes": decoded,
            "side": classify_side(decoded),
        }
        self.cache.put(self.section, name, record)
        return record
