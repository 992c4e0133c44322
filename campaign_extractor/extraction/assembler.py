"""Final ordering of extracted entities."""

from typing import Optional

from campaign_extractor.entities.schema import NPC, AnyEntity, Item, Location, Quest, SessionSummary


def assemble(
    summary: Optional[SessionSummary],
    npcs: list[NPC],
    locations: list[Location],
    items: list[Item],
    quests: list[Quest],
) -> list[AnyEntity]:
    """Concatenate entities as summary, NPCs, locations, items, quests."""
    entities: list[AnyEntity] = [summary] if summary is not None else []
    entities.extend(npcs)
    entities.extend(locations)
    entities.extend(items)
    entities.extend(quests)
    return entities
