"""
Star Wars API Endpoints

All routes are prefixed with /starwars (configured in main.py).

Routes:
    - GET /starwars/                          -> {totalPeople, totalPlanets, lightSideCount,
                                                  darkSideCount, planets}
    - GET /starwars/planets-with-residents    -> {totalPlanetsWithResidents, lightSideCount,
                                                  darkSideCount, planets}

Every planet carries its residents, per-side counts and ibf = (light - dark) / residents.
When the cache is stale the people and planets backfills run side by side.
"""
from fastapi import APIRouter, Depends

from pycatalog.server.core import CatalogManager, get_catalogs

router = APIRouter()


@router.get("/")
async def get_starwars(catalogs: CatalogManager = Depends(get_catalogs)):
    """All planets joined with their residents and oracle sides."""
    return await catalogs.call(catalogs.starwars.summary)


@router.get("/planets-with-residents")
async def get_planets_with_residents(catalogs: CatalogManager = Depends(get_catalogs)):
    """Only the planets that have at least one known resident."""
    return await catalogs.call(catalogs.starwars.planets_with_residents)
