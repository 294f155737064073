"""
Stars API Endpoint

    GET /api/stars -> {totalStars, totalResonance, averageResonance, data}

A cold or expired cache walks every page of the stars resource (one request per
second), so the first call can take well over half a minute.
"""
from fastapi import APIRouter, Depends

from pycatalog.server.core import CatalogManager, get_catalogs

router = APIRouter()


@router.get("/api/stars")
async def get_stars(catalogs: CatalogManager = Depends(get_catalogs)):
    """Fetch all stars and report total and average resonance."""
    return await catalogs.call(catalogs.stars.summary)
