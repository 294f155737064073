import logging
from typing import Any, Optional, Union

import requests
from requests import Response

from pycatalog.exceptions import NotFound, FetchError

log = logging.getLogger(__name__)

API_KEY_HEADER = "API-KEY"


class CatalogClient(object):
    """
    Thin HTTP client shared by every remote catalog.

    A 404 raises NotFound, every other failure raises FetchError. Nothing is retried:
    the adapter is mounted with max_retries=0 and callers decide what a failure means.
    """

    def __init__(self, api_key: Optional[str] = None, timeout: Union[int, float] = 10, poolmaxsize: int = 10,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.timeout = timeout
        self.poolmaxsize = poolmaxsize
        if session is not None:
            self.session = session
        else:
            self.session = requests.Session()
            # noinspection PyUnresolvedReferences
            a = requests.adapters.HTTPAdapter(pool_maxsize=self.poolmaxsize, max_retries=0)
            self.session.mount('https://', a)
            self.session.mount('http://', a)

    def get_json(self, url: str, params: Optional[dict] = None, authenticated: bool = False) -> Any:
        """Return the decoded JSON body of a GET request."""
        headers = {}
        if authenticated and self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        log.debug(' -- client: Request %s params=%s' % (url, params))
        try:
            r: Response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise FetchError(url, "timeout")
        except requests.exceptions.ConnectionError as exc:
            raise FetchError(url, f"connection error: {exc}")
        except requests.exceptions.RequestException as exc:
            raise FetchError(url, str(exc))
        if r.status_code == 404:
            raise NotFound(url)
        if r.status_code >= 400:
            raise FetchError(url, f"HTTP {r.status_code}")
        try:
            return r.json()
        except ValueError as exc:
            raise FetchError(url, f"invalid JSON: {exc}")

    def close(self):
        self.session.close()
