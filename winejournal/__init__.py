"""WineJournal - structured ingestion of wine journal, receipt and label text."""

__version__ = "0.3.0"
