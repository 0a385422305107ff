"""API routers for WineJournal."""

from winejournal.routers import import_router

__all__ = ["import_router"]
