"""Recover campaign entities from tabletop RPG session notes."""

from campaign_extractor.document.models import Heading, NormalizedDocument
from campaign_extractor.entities.schema import (
    NPC,
    AnyEntity,
    EntityKind,
    Item,
    ItemRarity,
    ItemType,
    Location,
    LocationType,
    NPCImportance,
    Quest,
    QuestType,
    SessionSummary,
    dump_entities,
)
from campaign_extractor.extraction.config import ExtractorConfig, default_config
from campaign_extractor.extraction.pipeline import EntityExtractor, extract_entities

__all__ = [
    "extract_entities",
    "EntityExtractor",
    "ExtractorConfig",
    "default_config",
    "NormalizedDocument",
    "Heading",
    "AnyEntity",
    "EntityKind",
    "NPC",
    "Location",
    "Item",
    "Quest",
    "SessionSummary",
    "LocationType",
    "ItemType",
    "ItemRarity",
    "QuestType",
    "NPCImportance",
    "dump_entities",
]
