"""Entity extraction from tabletop RPG session notes.

Stages, in order:
- Session context resolution (session number, title, status, synopsis)
- Pattern scanning per entity kind, plus optional campaign gazetteer matching
- Keyword classification of location and item subtypes
- Exact-title deduplication and session tagging
- Assembly in fixed kind order
"""

from campaign_extractor.extraction.config import ExtractorConfig, default_config
from campaign_extractor.extraction.models import (
    Candidate,
    CandidateMention,
    GazetteerEntry,
    SessionContext,
)
from campaign_extractor.extraction.pipeline import EntityExtractor, extract_entities

__all__ = [
    # Main pipeline
    "EntityExtractor",
    "extract_entities",
    # Configuration
    "ExtractorConfig",
    "default_config",
    # Models
    "Candidate",
    "CandidateMention",
    "GazetteerEntry",
    "SessionContext",
]
