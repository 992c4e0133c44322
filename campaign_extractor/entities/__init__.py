"""Campaign entity models."""

from campaign_extractor.entities.schema import (
    ENTITY_MODELS,
    NPC,
    AnyEntity,
    BaseEntity,
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
    load_entities,
)

__all__ = [
    "ENTITY_MODELS",
    "NPC",
    "AnyEntity",
    "BaseEntity",
    "EntityKind",
    "Item",
    "ItemRarity",
    "ItemType",
    "Location",
    "LocationType",
    "NPCImportance",
    "Quest",
    "QuestType",
    "SessionSummary",
    "dump_entities",
    "load_entities",
]
