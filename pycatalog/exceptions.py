class PyCatalogError(Exception):
    pass


class NotFound(PyCatalogError):
    """Upstream answered 404 - the record does not exist."""

    def __init__(self, url):
        self.url = url
        super().__init__(f"Not found: {url}")


class FetchError(PyCatalogError):
    """Any other upstream failure (timeout, connection error, 5xx, bad JSON)."""

    def __init__(self, url, reason):
        self.url = url
        self.reason = reason
        super().__init__(f"Unable to fetch {url}: {reason}")


class DecodeError(PyCatalogError):
    pass


class CacheIOError(PyCatalogError):
    pass
