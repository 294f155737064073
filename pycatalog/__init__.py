# pyCatalog Module
# -*- coding: utf-8 -*-
"""
 Python module to aggregate public REST catalogs behind a small HTTP service

 For more information see README.md

 Features
    * Walks remote catalogs by sequential ID or by page with a fixed delay between requests
    * Caches normalized records in a write-through JSON file per domain
    * Skips full catalog refreshes while the cache is younger than 24 hours
    * Enriches Star Wars people with oracle notes classified as light or dark side
    * Reduces catalogs to totals, averages by type and planet IBF scores

 Classes
    CatalogClient(api_key, timeout, poolmaxsize)
    DiskCache(path, sections, ttl, exporters, lock_timeout)
    SequentialCatalog(client, cache, section, url, normalize, delay, limit)
    PagedCatalog(client, cache, section, url, pages, delay, key)
    Oracle(client, cache, url)
    StarsService(catalog, cache)
    Pokedex(catalog, cache)
    StarWarsService(people, planets, oracle, cache)

 Functions
    set_debug(toggle, color)  # Enable verbose logging
    parse_radar(coordinates)  # Decode a pipe-delimited radar string into an 8x8 grid

 Requirements
    This module requires the following modules: requests
    The HTTP server also requires: fastapi, uvicorn, pydantic-settings
"""
import logging
import sys

version_tuple = (0, 3, 0)
version = __version__ = '%d.%d.%d' % version_tuple
__author__ = 'pycatalog'

from pycatalog.exceptions import PyCatalogError, NotFound, FetchError, DecodeError, CacheIOError
from pycatalog.client import CatalogClient
from pycatalog.cache import DiskCache
from pycatalog.fetcher import SequentialCatalog, PagedCatalog
from pycatalog.oracle import Oracle, decode_notes, classify_side
from pycatalog.stars import StarsService
from pycatalog.pokemon import Pokedex
from pycatalog.starwars import StarWarsService
from pycatalog.radar import parse_radar, format_grid

log = logging.getLogger(__name__)
log.debug('%s version %s', __name__, __version__)
log.debug('Python %s on %s', sys.version, sys.platform)


def set_debug(toggle=True, color=True):
    """Enable verbose logging"""
    if toggle:
        if color:
            logging.basicConfig(format='\x1b[31;1m%(levelname)s:%(message)s\x1b[0m', level=logging.DEBUG)
        else:
            logging.basicConfig(format='%(levelname)s:%(message)s', level=logging.DEBUG)
        log.setLevel(logging.DEBUG)
        log.debug("%s [%s]\n" % (__name__, __version__))
    else:
        log.setLevel(logging.NOTSET)
