"""
Core Business Logic Module

    catalog_manager.py - CatalogManager: shared client, per-domain caches and services
        • Built once in the app lifespan, stored on app.state.catalogs
        • Runs blocking library calls in a dedicated thread pool
"""
from .catalog_manager import CatalogManager, get_catalogs

__all__ = ["CatalogManager", "get_catalogs"]
