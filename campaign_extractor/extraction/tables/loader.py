"""Pattern and keyword table loading from YAML files."""

import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field

from campaign_extractor.entities.schema import EntityKind, ItemRarity, ItemType, LocationType
from campaign_extractor.extraction.config import default_config

logger = logging.getLogger(__name__)

# {macro} references inside pattern templates
MACRO_PATTERN = re.compile(r"\{([a-z_]+)\}")
MAX_EXPANSION_PASSES = 5

Subtype = Union[LocationType, ItemType, ItemRarity]


class PatternSpec(BaseModel):
    """A pattern as declared in a table file."""

    name: str
    regex: str
    title_template: Optional[str] = None  # e.g. "{verb} {object}"
    attributes: dict[str, Any] = Field(default_factory=dict)  # Static attributes
    tag_groups: dict[str, str] = Field(default_factory=dict)  # group -> tag prefix


class CompiledPattern:
    """A pattern spec with its expanded, compiled regex."""

    def __init__(self, spec: PatternSpec, regex: re.Pattern, order: int):
        self.spec = spec
        self.regex = regex
        self.order = order  # Position in the table; lower wins ties

    @property
    def name(self) -> str:
        return self.spec.name


class SubtypeKeywords(BaseModel):
    """Keywords voting for one subtype value."""

    value: Subtype
    keywords: list[str] = Field(default_factory=list)


class KindTables:
    """Everything the scanner and classifier need for one entity kind."""

    def __init__(
        self,
        kind: EntityKind,
        patterns: list[CompiledPattern],
        excluded_words: set[str],
        types: list[SubtypeKeywords],
        rarities: list[SubtypeKeywords],
    ):
        self.kind = kind
        self.patterns = patterns
        self.excluded_words = excluded_words
        self.types = types
        self.rarities = rarities


class ExtractionTables:
    """All loaded tables. Read-only once built."""

    def __init__(
        self,
        stop_words: set[str],
        generic_words: set[str],
        kinds: dict[EntityKind, KindTables],
    ):
        self.stop_words = stop_words
        self.generic_words = generic_words
        self.kinds = kinds

    def for_kind(self, kind: EntityKind) -> KindTables:
        """Get the tables for a scanned kind."""
        if kind not in self.kinds:
            raise ValueError(f"No pattern tables for kind '{EntityKind(kind).value}'")
        return self.kinds[kind]


def build_alternation(words: list[str]) -> str:
    """Build an escaped, longest-first regex alternation."""
    ordered = sorted(set(words), key=lambda w: (-len(w), w))
    return "(?:" + "|".join(re.escape(w) for w in ordered) + ")"


def expand_macros(template: str, macros: dict[str, str]) -> str:
    """Substitute {macro} references until the template stops changing.

    Unknown macro names are left untouched so regex quantifiers such as
    ``{1,2}`` survive.
    """
    for _ in range(MAX_EXPANSION_PASSES):
        expanded = MACRO_PATTERN.sub(lambda m: macros.get(m.group(1), m.group(0)), template)
        if expanded == template:
            break
        template = expanded
    return template


class TableLoader:
    """Load extraction tables from a directory of YAML files."""

    VOCABULARY_FILE = "vocabulary.yaml"

    # Map scanned kinds to their table files
    KIND_FILES = {
        EntityKind.NPC: "npc.yaml",
        EntityKind.LOCATION: "location.yaml",
        EntityKind.ITEM: "item.yaml",
        EntityKind.QUEST: "quest.yaml",
    }

    # Kinds whose tables carry a subtype keyword table
    SUBTYPE_ENUMS = {
        EntityKind.LOCATION: LocationType,
        EntityKind.ITEM: ItemType,
    }

    def __init__(self, tables_dir: Optional[Path] = None):
        self.tables_dir = Path(tables_dir or default_config.tables_dir)

    def load(self) -> ExtractionTables:
        """Load the vocabulary and every kind table.

        Raises:
            FileNotFoundError: If the tables directory or a table file is missing.
            ValueError: If a keyword table names an unknown subtype.
        """
        if not self.tables_dir.is_dir():
            raise FileNotFoundError(f"Tables directory not found: {self.tables_dir}")

        vocabulary = self._load_file(self.tables_dir / self.VOCABULARY_FILE)
        macros = self._build_macros(vocabulary)

        kinds = {}
        for kind, filename in self.KIND_FILES.items():
            data = self._load_file(self.tables_dir / filename)
            kinds[kind] = self._build_kind_tables(kind, data, macros)

        return ExtractionTables(
            stop_words=self._word_set(vocabulary.get("stop_words")),
            generic_words=self._word_set(vocabulary.get("generic_words")),
            kinds=kinds,
        )

    def _load_file(self, filepath: Path) -> dict:
        """Load a single YAML table file."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return data or {}

    def _build_macros(self, vocabulary: dict) -> dict[str, str]:
        """Turn fragments and word lists into macro substitutions."""
        macros = {name: str(value) for name, value in (vocabulary.get("fragments") or {}).items()}

        for name, words in (vocabulary.get("lists") or {}).items():
            words = [str(w) for w in words or []]
            if not words:
                logger.warning(f"Vocabulary list '{name}' is empty, skipping")
                continue
            macros[name] = build_alternation(words)
            macros[f"{name}_capitalized"] = build_alternation([w[:1].upper() + w[1:] for w in words])

        return macros

    def _build_kind_tables(self, kind: EntityKind, data: dict, macros: dict[str, str]) -> KindTables:
        """Compile the patterns and keyword tables of one kind."""
        patterns = []
        for item in data.get("patterns") or []:
            compiled = self._compile_pattern(kind, item, macros, order=len(patterns))
            if compiled:
                patterns.append(compiled)

        types = []
        if kind in self.SUBTYPE_ENUMS:
            types = self._parse_keywords(data.get("types"), self.SUBTYPE_ENUMS[kind])

        rarities = []
        if kind == EntityKind.ITEM:
            rarities = self._parse_keywords(data.get("rarities"), ItemRarity)

        logger.debug(f"Loaded {len(patterns)} {kind.value} patterns")

        return KindTables(
            kind=kind,
            patterns=patterns,
            excluded_words=self._word_set(data.get("excluded_words")),
            types=types,
            rarities=rarities,
        )

    def _compile_pattern(
        self,
        kind: EntityKind,
        item: dict,
        macros: dict[str, str],
        order: int,
    ) -> Optional[CompiledPattern]:
        """Expand and compile one pattern, skipping it if it is unusable."""
        spec = PatternSpec(**item)

        try:
            regex = re.compile(expand_macros(spec.regex, macros))
        except re.error as e:
            logger.warning(f"Skipping invalid {kind.value} pattern '{spec.name}': {e}")
            return None

        # A mention needs a title group, or verb/object groups for a template
        if "title" not in regex.groupindex and not spec.title_template:
            logger.warning(f"Skipping {kind.value} pattern '{spec.name}': no title group")
            return None

        return CompiledPattern(spec=spec, regex=regex, order=order)

    def _parse_keywords(self, entries: Optional[list], enum_cls: type) -> list[SubtypeKeywords]:
        """Parse a declaration-ordered keyword table.

        Unknown subtype values raise ValueError from the enum lookup.
        """
        table = []
        for entry in entries or []:
            table.append(
                SubtypeKeywords(
                    value=enum_cls(entry["value"]),
                    keywords=[str(k) for k in entry.get("keywords") or []],
                )
            )
        return table

    def _word_set(self, words: Optional[list]) -> set[str]:
        return {str(w).lower() for w in words or []}
