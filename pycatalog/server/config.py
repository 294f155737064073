"""
Configuration Management for the pyCatalog Server

All settings come from environment variables (or a local ``.env`` file) through a
pydantic-settings ``Settings`` class. Upstream URLs and the shared API key are no
longer literals in the code; the defaults below point at the public services.

Environment Variables:

    Server Settings:
        CATALOG_BIND_ADDRESS   - Server bind address (default: "0.0.0.0")
        PORT                   - Server port (default: 3000)
        CATALOG_DEBUG          - Enable debug logging (default: false)
        CORS_ORIGINS           - JSON list of allowed origins (default: ["*"])

    Upstream Catalogs:
        CATALOG_API_KEY        - Shared secret sent as the API-KEY header (stars, oracle)
        CATALOG_STARS_URL      - Paged stars resource
        CATALOG_STARS_PAGES    - Number of star pages to walk (default: 34)
        CATALOG_POKEMON_URL    - Pokemon URL template with {id}
        CATALOG_PEOPLE_URL     - SWAPI people URL template with {id}
        CATALOG_PLANETS_URL    - SWAPI planets URL template with {id}
        CATALOG_PEOPLE_LIMIT   - Last SWAPI people ID to walk (default: 83)
        CATALOG_ORACLE_URL     - Oracle lookup resource (queried with ?name=)

    Fetching and Caching:
        CATALOG_REQUEST_DELAY  - Seconds between upstream requests (default: 1.0)
        CATALOG_TIMEOUT        - Upstream request timeout in seconds (default: 10)
        CATALOG_POOL_MAXSIZE   - HTTP connection pool size (default: 10)
        CATALOG_DATA_DIR       - Directory for cache files and CSV export (default: "data")
        CATALOG_CACHE_TTL      - Seconds a full refresh stays valid (default: 86400)
        CATALOG_LOCK_TIMEOUT   - Seconds to wait for the cache writer lock (default: 30)

Accessing Configuration:

    from pycatalog.server.config import get_settings

    settings = get_settings()
    port = settings.server_port
"""
import logging
import os
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from pycatalog.stars import STARS_PAGES
from pycatalog.starwars import MAX_PEOPLE

logger = logging.getLogger(__name__)

DEFAULT_STARS_URL = "https://makers-challenge.altscore.ai/v1/s1/e2/resources/stars"
DEFAULT_ORACLE_URL = "https://makers-challenge.altscore.ai/v1/s1/e3/resources/oracle-rolodex"
DEFAULT_POKEMON_URL = "https://pokeapi.co/api/v2/pokemon/{id}"
DEFAULT_PEOPLE_URL = "https://swapi.dev/api/people/{id}/"
DEFAULT_PLANETS_URL = "https://swapi.dev/api/planets/{id}/"


class Settings(BaseSettings):
    """Application settings."""

    # Server configuration
    server_host: str = Field(default="0.0.0.0", alias="CATALOG_BIND_ADDRESS")
    server_port: int = Field(default=3000, alias="PORT")
    debug: bool = Field(default=False, alias="CATALOG_DEBUG")
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # Upstream catalogs
    api_key: Optional[str] = Field(default=None, alias="CATALOG_API_KEY")
    stars_url: str = Field(default=DEFAULT_STARS_URL, alias="CATALOG_STARS_URL")
    stars_pages: int = Field(default=STARS_PAGES, alias="CATALOG_STARS_PAGES")
    pokemon_url: str = Field(default=DEFAULT_POKEMON_URL, alias="CATALOG_POKEMON_URL")
    people_url: str = Field(default=DEFAULT_PEOPLE_URL, alias="CATALOG_PEOPLE_URL")
    planets_url: str = Field(default=DEFAULT_PLANETS_URL, alias="CATALOG_PLANETS_URL")
    people_limit: int = Field(default=MAX_PEOPLE, alias="CATALOG_PEOPLE_LIMIT")
    oracle_url: str = Field(default=DEFAULT_ORACLE_URL, alias="CATALOG_ORACLE_URL")

    # Fetching and caching
    request_delay: float = Field(default=1.0, alias="CATALOG_REQUEST_DELAY")
    timeout: float = Field(default=10, alias="CATALOG_TIMEOUT")
    pool_maxsize: int = Field(default=10, alias="CATALOG_POOL_MAXSIZE")
    data_dir: str = Field(default="data", alias="CATALOG_DATA_DIR")
    cache_ttl: int = Field(default=24 * 60 * 60, alias="CATALOG_CACHE_TTL")
    lock_timeout: float = Field(default=30, alias="CATALOG_LOCK_TIMEOUT")

    model_config = {
        "env_prefix": "",
        "env_file": ".env",
        "extra": "ignore",
        "case_sensitive": False,
        "populate_by_name": True,
    }

    def cache_path(self, name: str) -> str:
        return os.path.join(self.data_dir, f"{name}_cache.json")

    @property
    def csv_path(self) -> str:
        return os.path.join(self.data_dir, "pokemon_data.csv")


def get_settings() -> Settings:
    settings = Settings()
    if not settings.api_key:
        logger.warning("CATALOG_API_KEY is not set - stars and oracle requests will be unauthenticated")
    return settings
