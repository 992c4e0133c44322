"""Keyword-table subtype classification for locations and items."""

import re
from typing import Optional, Union

from campaign_extractor.entities.schema import EntityKind, ItemRarity, ItemType, LocationType
from campaign_extractor.extraction.tables.loader import ExtractionTables, SubtypeKeywords

CLASSIFIABLE_KINDS = (EntityKind.LOCATION, EntityKind.ITEM)

# (subtype, keyword patterns) in declaration order
KeywordTable = list[tuple[Union[LocationType, ItemType, ItemRarity], list[re.Pattern]]]


def compile_keyword(keyword: str) -> re.Pattern:
    """Case-insensitive, word-bounded keyword pattern."""
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)


class TypeClassifier:
    """Assign subtypes by counting keyword hits."""

    def __init__(self, tables: ExtractionTables):
        self._type_tables: dict[EntityKind, KeywordTable] = {
            kind: self._compile_table(tables.for_kind(kind).types) for kind in CLASSIFIABLE_KINDS
        }
        self._rarity_table = self._compile_table(tables.for_kind(EntityKind.ITEM).rarities)

    def classify(
        self,
        kind: EntityKind,
        title: str,
        context_window: str,
    ) -> Optional[Union[LocationType, ItemType]]:
        """Pick the subtype whose keywords occur most often.

        Args:
            kind: LOCATION or ITEM.
            title: Mention title.
            context_window: Text scored together with the title.

        Returns:
            The winning subtype, the earliest declared on ties, or None.

        Raises:
            ValueError: If the kind has no subtype vocabulary.
        """
        kind = EntityKind(kind)
        if kind not in self._type_tables:
            raise ValueError(f"Cannot classify entities of kind '{kind.value}'")

        return self._best_match(self._type_tables[kind], f"{title} {context_window}")

    def classify_rarity(self, title: str, context_window: str) -> Optional[ItemRarity]:
        """Pick an item rarity from the same kind of keyword vote."""
        return self._best_match(self._rarity_table, f"{title} {context_window}")

    def _best_match(self, table: KeywordTable, text: str):
        best = None
        best_count = 0

        for value, patterns in table:
            count = sum(len(p.findall(text)) for p in patterns)
            # Strictly greater keeps the earliest declared subtype on ties
            if count > best_count:
                best, best_count = value, count

        return best

    def _compile_table(self, entries: list[SubtypeKeywords]) -> KeywordTable:
        return [(entry.value, [compile_keyword(k) for k in entry.keywords]) for entry in entries]
