"""
API Routers Module

Each router is registered in main.py:

    stars.py    - GET  /api/stars                          (no prefix)
    pokemon.py  - GET  /pokemon/heights, /pokemon/range/{start}/{end}, /pokemon/{id}
    starwars.py - GET  /starwars/, /starwars/planets-with-residents
    radar.py    - POST /radar                              (no prefix)

Routes never call the network directly: they go through the CatalogManager, which
runs the blocking catalog code in its worker pool. HTTP errors are returned as
{"error": <message>} by the handlers installed in main.py.

Route order matters in pokemon.py: /heights and /range/... are declared before the
/{pokemon_id} catch-all.
"""
from . import stars, pokemon, starwars, radar

__all__ = ["stars", "pokemon", "starwars", "radar"]
