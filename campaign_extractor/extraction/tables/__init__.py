"""YAML pattern and keyword tables."""

from campaign_extractor.extraction.tables.loader import (
    CompiledPattern,
    ExtractionTables,
    KindTables,
    PatternSpec,
    SubtypeKeywords,
    TableLoader,
)

__all__ = [
    "CompiledPattern",
    "ExtractionTables",
    "KindTables",
    "PatternSpec",
    "SubtypeKeywords",
    "TableLoader",
]
