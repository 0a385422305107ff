"""Journal parser package for turning free-text wine notes into purchases."""

from .assembler import JournalAssembler
from .classifier import LineType, SkipReason, classify_line
from .label import parse_label_text
from .parser import (
    ImportMode,
    JournalParserService,
    parse_receipt_text,
    parse_standard_text,
)

__all__ = [
    "ImportMode",
    "JournalAssembler",
    "JournalParserService",
    "LineType",
    "SkipReason",
    "classify_line",
    "parse_label_text",
    "parse_receipt_text",
    "parse_standard_text",
]
