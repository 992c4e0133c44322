"""Campaign entity definitions recovered from session notes."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class EntityKind(str, Enum):
    """Kinds of entities the extractor can produce."""

    NPC = "npc"
    LOCATION = "location"
    ITEM = "item"
    QUEST = "quest"
    SESSION_SUMMARY = "session_summary"


class LocationType(str, Enum):
    """Closed vocabulary of location subtypes."""

    CITY = "city"
    TOWN = "town"
    VILLAGE = "village"
    DUNGEON = "dungeon"
    TAVERN = "tavern"
    SHOP = "shop"
    TEMPLE = "temple"
    LANDMARK = "landmark"
    WILDERNESS = "wilderness"


class ItemType(str, Enum):
    """Closed vocabulary of item subtypes."""

    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"
    CONSUMABLE = "consumable"
    TOOL = "tool"
    ADVENTURING_GEAR = "adventuring_gear"
    TREASURE = "treasure"
    MAGIC_ITEM = "magic_item"


class ItemRarity(str, Enum):
    """D&D 5e item rarity tiers."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very_rare"
    LEGENDARY = "legendary"
    ARTIFACT = "artifact"


class QuestType(str, Enum):
    """Quest categories."""

    MAIN = "main"
    SIDE = "side"
    PERSONAL = "personal"


class NPCImportance(str, Enum):
    """How prominent an NPC is within the notes."""

    MINOR = "minor"
    SUPPORTING = "supporting"
    MAJOR = "major"


class BaseEntity(BaseModel):
    """Fields shared by every entity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: EntityKind
    title: str  # Canonical surface form of the mention
    source_sessions: Optional[list[int]] = Field(default=None, alias="sourceSessions")
    tags: list[str] = Field(default_factory=list)


class NPC(BaseEntity):
    """Non-player character."""

    kind: Literal[EntityKind.NPC] = EntityKind.NPC
    role: Optional[str] = None  # e.g. "barkeep"
    faction: Optional[str] = None
    importance: Optional[NPCImportance] = None
    status: Optional[str] = None


class Location(BaseEntity):
    """A place mentioned in the notes."""

    kind: Literal[EntityKind.LOCATION] = EntityKind.LOCATION
    type: Optional[LocationType] = None
    region: Optional[str] = None
    faction_presence: list[str] = Field(default_factory=list)
    status: Optional[str] = None


class Item(BaseEntity):
    """An object, weapon or piece of treasure."""

    kind: Literal[EntityKind.ITEM] = EntityKind.ITEM
    type: Optional[ItemType] = None
    rarity: Optional[ItemRarity] = None
    owner: Optional[str] = None
    status: Optional[str] = None


class Quest(BaseEntity):
    """A quest or objective given to the party."""

    kind: Literal[EntityKind.QUEST] = EntityKind.QUEST
    status: Optional[str] = None  # e.g. "active"
    type: Optional[QuestType] = None
    owner: Optional[str] = None  # Quest giver
    faction: Optional[str] = None


class SessionSummary(BaseEntity):
    """Summary of one play session. Never carries source sessions."""

    kind: Literal[EntityKind.SESSION_SUMMARY] = EntityKind.SESSION_SUMMARY
    session_number: Optional[int] = None
    status: Optional[str] = None  # "complete", "draft", ...
    brief_synopsis: Optional[str] = None
    full_summary: Optional[str] = None


AnyEntity = Annotated[
    Union[NPC, Location, Item, Quest, SessionSummary],
    Field(discriminator="kind"),
]

# Entity model per kind, in output order
ENTITY_MODELS: dict[EntityKind, type[BaseEntity]] = {
    EntityKind.SESSION_SUMMARY: SessionSummary,
    EntityKind.NPC: NPC,
    EntityKind.LOCATION: Location,
    EntityKind.ITEM: Item,
    EntityKind.QUEST: Quest,
}

_entity_list_adapter = TypeAdapter(list[AnyEntity])


def dump_entities(entities: list[BaseEntity]) -> list[dict]:
    """Serialize entities to JSON-ready dicts.

    Unset optional fields are dropped and ``source_sessions`` is written as
    ``sourceSessions``.
    """
    return _entity_list_adapter.dump_python(
        list(entities),
        mode="json",
        by_alias=True,
        exclude_none=True,
    )


def load_entities(data: list[dict]) -> list[BaseEntity]:
    """Parse serialized entities back into their models."""
    return _entity_list_adapter.validate_python(data)
