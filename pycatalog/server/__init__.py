"""FastAPI server exposing the pyCatalog aggregates over HTTP."""
