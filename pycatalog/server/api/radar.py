"""
Radar API Endpoint

    POST /radar  {"coordinates": "a1X|b2$..."}  -> {"message": "Radar coordinates processed successfully"}

The decoded 8x8 grid is written to the log; the response only acknowledges it.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from pycatalog.radar import format_grid, parse_radar

logger = logging.getLogger(__name__)

router = APIRouter()


class RadarRequest(BaseModel):
    coordinates: Optional[str] = None


@router.post("/radar")
async def post_radar(payload: Optional[RadarRequest] = Body(default=None)):
    """Parse radar coordinates into a grid."""
    if payload is None or not payload.coordinates:
        raise HTTPException(status_code=400, detail="Coordinates are required")

    logger.info(f"Received coordinates: {payload.coordinates}")
    grid = parse_radar(payload.coordinates)
    logger.info("Radar Grid:\n%s", format_grid(grid))
    return {"message": "Radar coordinates processed successfully"}
