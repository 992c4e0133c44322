"""Main extraction pipeline orchestrating all stages."""

import logging
import re
from functools import lru_cache
from typing import Optional

from campaign_extractor.document.models import NormalizedDocument
from campaign_extractor.entities.schema import AnyEntity, EntityKind, NPCImportance
from campaign_extractor.extraction.assembler import assemble
from campaign_extractor.extraction.classifier import CLASSIFIABLE_KINDS, TypeClassifier
from campaign_extractor.extraction.config import ExtractorConfig, default_config
from campaign_extractor.extraction.extractors.scanner import CandidateScanner
from campaign_extractor.extraction.gazetteers.loader import GazetteerLoader
from campaign_extractor.extraction.gazetteers.matcher import GazetteerMatcher
from campaign_extractor.extraction.models import Candidate, CandidateMention
from campaign_extractor.extraction.resolution.reconciler import EntityReconciler
from campaign_extractor.extraction.session.resolver import SessionContextResolver
from campaign_extractor.extraction.tables.loader import TableLoader

logger = logging.getLogger(__name__)

# Kinds found by scanning, in output order
SCANNED_KINDS = (EntityKind.NPC, EntityKind.LOCATION, EntityKind.ITEM, EntityKind.QUEST)


class EntityExtractor:
    """Extract campaign entities from one normalized session document."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        """Initialize the extractor.

        Tables and the campaign gazetteer are loaded once here and only read
        afterwards, so one instance can serve any number of documents.

        Args:
            config: Extractor configuration. Uses defaults if None.
        """
        self.config = config or default_config

        self.tables = TableLoader(self.config.tables_dir).load()

        # Load the campaign gazetteer
        self.matcher = None
        if self.config.use_gazetteer and self.config.campaign_gazetteer_dir:
            entries = GazetteerLoader(self.config.campaign_gazetteer_dir).load_all()
            if entries:
                self.matcher = GazetteerMatcher()
                self.matcher.load_entries(entries)

        self.session_resolver = SessionContextResolver(self.config)
        self.scanner = CandidateScanner(self.tables, self.config, matcher=self.matcher)
        self.classifier = TypeClassifier(self.tables)
        self.reconciler = EntityReconciler()

    def extract(self, document: NormalizedDocument, filename: str = "") -> list[AnyEntity]:
        """Extract entities from a document.

        Args:
            document: Normalized session notes.
            filename: Source file name, used only for the session number.

        Returns:
            Summary (if any), then NPCs, locations, items and quests.
        """
        if document.is_empty:
            return []

        context = self.session_resolver.resolve(filename, document.headings)
        summary = self.session_resolver.build_summary(context, document)

        text = document.plain_text
        candidates = []
        npc_titles: set[str] = set()
        for kind in SCANNED_KINDS:
            for mention in self.scanner.scan(text, kind):
                if kind == EntityKind.LOCATION and self._claimed_by_npc(mention, npc_titles):
                    continue
                if kind == EntityKind.NPC:
                    npc_titles.add(mention.title)
                candidates.append(self._to_candidate(kind, mention, text))

        entities = self.reconciler.reconcile(candidates, context.session_number)

        by_kind = {kind: [] for kind in SCANNED_KINDS}
        for entity in entities:
            by_kind[entity.kind].append(entity)

        logger.debug(
            f"Extracted session={context.session_number} "
            + ", ".join(f"{kind.value}={len(by_kind[kind])}" for kind in SCANNED_KINDS)
        )

        return assemble(
            summary,
            by_kind[EntityKind.NPC],
            by_kind[EntityKind.LOCATION],
            by_kind[EntityKind.ITEM],
            by_kind[EntityKind.QUEST],
        )

    def _to_candidate(self, kind: EntityKind, mention: CandidateMention, text: str) -> Candidate:
        """Add inferred attributes to a mention. Gazetteer attributes are kept."""
        attributes = dict(mention.attributes)

        if kind in CLASSIFIABLE_KINDS and "type" not in attributes:
            subtype = self.classifier.classify(kind, mention.title, mention.hint or mention.context_window)
            if subtype is not None:
                attributes["type"] = subtype

        if kind == EntityKind.ITEM and "rarity" not in attributes:
            rarity = self.classifier.classify_rarity(mention.title, mention.context_window)
            if rarity is not None:
                attributes["rarity"] = rarity

        if kind == EntityKind.NPC and "importance" not in attributes:
            attributes["importance"] = self._importance(mention.title, text)

        return Candidate(kind=kind, title=mention.title, attributes=attributes)

    def _claimed_by_npc(self, mention: CandidateMention, npc_titles: set[str]) -> bool:
        """A bare "to <Name>" location loses to an NPC with the same title.

        Mentions with a type noun or from the gazetteer stay locations.
        """
        if mention.hint is not None or mention.pattern == "gazetteer":
            return False
        return mention.title in npc_titles

    def _importance(self, title: str, text: str) -> NPCImportance:
        """Rank an NPC by how often its name appears."""
        count = len(re.findall(rf"(?<!\w){re.escape(title)}(?!\w)", text))

        if count >= self.config.major_mentions:
            return NPCImportance.MAJOR
        if count >= self.config.supporting_mentions:
            return NPCImportance.SUPPORTING
        return NPCImportance.MINOR


@lru_cache
def get_default_extractor() -> EntityExtractor:
    """Get cached extractor with the default configuration."""
    return EntityExtractor()


def extract_entities(
    document: NormalizedDocument,
    filename: str = "",
    config: Optional[ExtractorConfig] = None,
) -> list[AnyEntity]:
    """Extract entities from a normalized document.

    Args:
        document: Normalized session notes.
        filename: Source file name, used only for the session number.
        config: Extractor configuration. A cached default extractor is used if None.

    Returns:
        Ordered list of entities.
    """
    extractor = EntityExtractor(config) if config is not None else get_default_extractor()
    return extractor.extract(document, filename)
