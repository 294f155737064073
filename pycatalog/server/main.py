"""
pyCatalog Server - Main FastAPI Application

Serves aggregates computed over the stars, pokemon and Star Wars catalogs.

    uvicorn pycatalog.server.main:app --port 3000
    python -m pycatalog serve

Routing Structure:

    1. Stars (no prefix):
       - GET  /api/stars
    2. Pokemon (prefix: /pokemon):
       - GET  /pokemon/heights
       - GET  /pokemon/range/{start}/{end}
       - GET  /pokemon/{pokemon_id}
    3. Star Wars (prefix: /starwars):
       - GET  /starwars/
       - GET  /starwars/planets-with-residents
    4. Radar (no prefix):
       - POST /radar
    5. Health:
       - GET  /health

Error Responses:
    Every HTTP error is returned as {"error": <message>}. Request validation failures
    become 400 and unexpected exceptions become 500 with a generic message (the
    traceback is logged, never returned).
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pycatalog import __version__
from pycatalog.server.api import pokemon, radar, stars, starwars
from pycatalog.server.config import Settings, get_settings
from pycatalog.server.core import CatalogManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    settings: Settings = app.state.settings
    manager: CatalogManager = app.state.catalogs

    logger.info(f"Starting pyCatalog Server v{__version__}...")
    logger.info(f"Request delay: {settings.request_delay}s, cache TTL: {settings.cache_ttl}s")
    if not manager.initialized:
        manager.initialize(settings)
    logger.info(f"Server listening on {settings.server_host}:{settings.server_port}")

    yield

    logger.info("Shutting down pyCatalog Server...")
    manager.shutdown()


def create_app(settings: Optional[Settings] = None, manager: Optional[CatalogManager] = None) -> FastAPI:
    """Build the application. A pre-built manager skips initialization at startup."""
    settings = settings or get_settings()

    app = FastAPI(
        title="pyCatalog Server",
        description="Aggregates over the stars, pokemon and Star Wars catalogs",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.catalogs = manager or CatalogManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.debug(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body or parameters"})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Error handling {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(stars.router, tags=["Stars"])
    app.include_router(pokemon.router, prefix="/pokemon", tags=["Pokemon"])
    app.include_router(starwars.router, prefix="/starwars", tags=["Star Wars"])
    app.include_router(radar.router, tags=["Radar"])

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Version and cache state of every domain."""
        catalogs: CatalogManager = app.state.catalogs
        return {
            "status": "healthy" if catalogs.initialized else "starting",
            "version": __version__,
            "caches": catalogs.cache_status(),
        }

    return app


def configure_logging(settings: Settings) -> None:
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


app = create_app()
configure_logging(app.state.settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pycatalog.server.main:app",
        host=app.state.settings.server_host,
        port=app.state.settings.server_port,
    )
