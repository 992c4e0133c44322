"""Campaign gazetteer loading from YAML files."""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from campaign_extractor.entities.schema import ENTITY_MODELS, EntityKind
from campaign_extractor.extraction.config import default_config
from campaign_extractor.extraction.models import GazetteerEntry

logger = logging.getLogger(__name__)

# Keys that describe the entry itself rather than entity attributes
RESERVED_KEYS = {"name", "kind", "aliases", "attributes", "title", "source_sessions", "sourceSessions"}


class GazetteerLoader:
    """Load known campaign names from YAML files."""

    # Map file names to a default kind for entries that omit one
    FILE_KIND_MAP = {
        "npcs.yaml": EntityKind.NPC,
        "locations.yaml": EntityKind.LOCATION,
        "items.yaml": EntityKind.ITEM,
        "quests.yaml": EntityKind.QUEST,
    }

    def __init__(self, campaign_dir: Optional[Path] = None):
        self.campaign_dir = campaign_dir or default_config.campaign_gazetteer_dir

    def load_all(self) -> list[GazetteerEntry]:
        """Load all gazetteer entries from the campaign directory."""
        if self.campaign_dir is None or not Path(self.campaign_dir).exists():
            return []

        entries = self._load_directory(Path(self.campaign_dir))
        logger.debug(f"Loaded {len(entries)} gazetteer entries from {self.campaign_dir}")
        return entries

    def _load_directory(self, directory: Path) -> list[GazetteerEntry]:
        """Load all YAML files from a directory in name order."""
        entries = []

        for yaml_file in sorted(directory.glob("*.yaml")):
            entries.extend(self._load_file(yaml_file))

        return entries

    def _load_file(self, filepath: Path) -> list[GazetteerEntry]:
        """Load a single YAML gazetteer file."""
        entries = []

        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not data:
            return entries

        if not isinstance(data, list):
            logger.warning(f"Gazetteer file {filepath.name} is not a list of entries, skipping")
            return entries

        default_kind = self.FILE_KIND_MAP.get(filepath.name)

        for item in data:
            entry = self._parse_entry(item, default_kind, filepath.name)
            if entry:
                entries.append(entry)

        return entries

    def _parse_entry(
        self,
        item: dict,
        default_kind: Optional[EntityKind],
        source: str,
    ) -> Optional[GazetteerEntry]:
        """Parse a single gazetteer entry from dict."""
        if not isinstance(item, dict) or not item.get("name"):
            logger.warning(f"Skipping gazetteer entry without a name in {source}")
            return None

        name = str(item["name"])

        if "kind" in item:
            try:
                kind = EntityKind(item["kind"])
            except ValueError:
                logger.warning(f"Skipping '{name}' in {source}: unknown kind '{item['kind']}'")
                return None
        else:
            kind = default_kind

        if kind is None or kind == EntityKind.SESSION_SUMMARY:
            logger.warning(f"Skipping '{name}' in {source}: no usable kind")
            return None

        # Explicit attributes plus any other top-level keys
        attributes = dict(item.get("attributes") or {})
        attributes.update({k: v for k, v in item.items() if k not in RESERVED_KEYS})

        # Reject attribute values the entity model would not accept
        try:
            ENTITY_MODELS[kind].model_validate({"title": name, **attributes})
        except ValidationError as e:
            logger.warning(f"Skipping '{name}' in {source}: invalid attributes ({e.error_count()} errors)")
            return None

        return GazetteerEntry(
            name=name,
            kind=kind,
            aliases=[str(a) for a in item.get("aliases") or []],
            attributes=attributes,
        )

    def load_by_kind(self, kind: EntityKind) -> list[GazetteerEntry]:
        """Load gazetteer entries for a specific kind."""
        return [e for e in self.load_all() if e.kind == kind]
