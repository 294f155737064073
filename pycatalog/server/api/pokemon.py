"""
Pokemon API Endpoints

All routes are prefixed with /pokemon (configured in main.py).

Routes:
    - GET /pokemon/heights              -> {"heights": {<type>: average height}} for the 18 types
    - GET /pokemon/range/{start}/{end}  -> {"total": n, "pokemon": [...]} (absent IDs skipped)
    - GET /pokemon/{pokemon_id}         -> single record, 404 when the ID does not exist

Validation:
    Non-numeric IDs, non-numeric bounds and start > end are rejected with 400.
"""
from fastapi import APIRouter, Depends, HTTPException

from pycatalog.server.core import CatalogManager, get_catalogs

router = APIRouter()


def parse_id(value: str, label: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label}: must be a number")
    if number < 1:
        raise HTTPException(status_code=400, detail=f"Invalid {label}: must be a positive number")
    return number


@router.get("/heights")
async def get_heights(catalogs: CatalogManager = Depends(get_catalogs)):
    """Average height per type across the whole catalog."""
    return await catalogs.call(catalogs.pokedex.heights)


@router.get("/range/{start}/{end}")
async def get_range(start: str, end: str, catalogs: CatalogManager = Depends(get_catalogs)):
    """Every pokemon with an ID between start and end inclusive."""
    first = parse_id(start, "start")
    last = parse_id(end, "end")
    if first > last:
        raise HTTPException(status_code=400, detail="Invalid range: start must not be greater than end")
    return await catalogs.call(catalogs.pokedex.range, first, last)


@router.get("/{pokemon_id}")
async def get_pokemon(pokemon_id: str, catalogs: CatalogManager = Depends(get_catalogs)):
    """One pokemon by ID, served from the cache when present."""
    number = parse_id(pokemon_id, "Pokemon ID")
    record = await catalogs.call(catalogs.pokedex.get, number)
    if record is None:
        raise HTTPException(status_code=404, detail="Pokemon not found")
    return record
