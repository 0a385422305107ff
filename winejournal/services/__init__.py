"""Services for WineJournal application."""

from winejournal.services.journal_parser import JournalParserService

__all__ = ["JournalParserService"]
