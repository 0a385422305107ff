"""Command line entry points for WineJournal."""
