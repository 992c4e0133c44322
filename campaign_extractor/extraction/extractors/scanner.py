"""Pattern-based candidate scanning."""

import logging
import re
from typing import Optional

from campaign_extractor.entities.schema import EntityKind
from campaign_extractor.extraction.config import ExtractorConfig, default_config
from campaign_extractor.extraction.gazetteers.matcher import GazetteerMatch, GazetteerMatcher
from campaign_extractor.extraction.models import CandidateMention
from campaign_extractor.extraction.tables.loader import CompiledPattern, ExtractionTables, KindTables

logger = logging.getLogger(__name__)

# Groups with a fixed meaning; every other named group is an attribute
STRUCTURAL_GROUPS = {"title", "hint", "verb", "object"}
LOWERCASE_ATTRIBUTES = {"role"}
TRAILING_PUNCTUATION = ".,;:!?"

# Gazetteer mentions sort ahead of every pattern at the same span
GAZETTEER_ORDER = -1


class CandidateScanner:
    """Scan text for candidate mentions of one entity kind."""

    def __init__(
        self,
        tables: ExtractionTables,
        config: Optional[ExtractorConfig] = None,
        matcher: Optional[GazetteerMatcher] = None,
    ):
        """Initialize the scanner.

        Args:
            tables: Loaded pattern tables.
            config: Extractor configuration. Uses defaults if None.
            matcher: Optional campaign gazetteer matcher.
        """
        self.tables = tables
        self.config = config or default_config
        self.matcher = matcher

    def scan(self, text: str, kind: EntityKind) -> list[CandidateMention]:
        """Find filtered, non-overlapping mentions of a kind.

        Args:
            text: Plain document text.
            kind: Entity kind to scan for.

        Returns:
            Mentions in text order. Earlier and longer mentions win overlaps.
        """
        kind_tables = self.tables.for_kind(kind)
        found: list[tuple[int, CandidateMention]] = []

        if self.matcher:
            for match in self.matcher.find_all(text, kind):
                found.append((GAZETTEER_ORDER, self._from_gazetteer(text, match)))

        for pattern in kind_tables.patterns:
            for match in pattern.regex.finditer(text):
                mention = self._from_match(text, match, pattern, kind_tables)
                if mention:
                    found.append((pattern.order, mention))

        mentions = self._select(found)
        logger.debug(f"Scanned {len(mentions)} {kind.value} mentions")
        return mentions

    def _from_match(
        self,
        text: str,
        match: re.Match,
        pattern: CompiledPattern,
        kind_tables: KindTables,
    ) -> Optional[CandidateMention]:
        """Build a mention from a regex match, or None if it is filtered out."""
        spec = pattern.spec
        groups = match.groupdict()

        if spec.title_template:
            verb, obj = groups.get("verb"), groups.get("object")
            if not verb or not obj:
                return None

            # Quest objects keep a leading article: "Find the Stone of Golorr"
            obj_title, _, end = self._clean_title(obj, match.start("object"), trim_stop_words=False)
            if not self.is_valid_title(obj_title, kind_tables):
                return None

            title = spec.title_template.format(verb=" ".join(verb.lower().split()), object=obj_title)
            title = title[:1].upper() + title[1:]
            if len(title) > self.config.max_title_length:
                return None
            start = match.start("verb")
        else:
            raw = groups.get("title")
            if not raw:
                return None

            title, start, end = self._clean_title(raw, match.start("title"))
            if not self.is_valid_title(title, kind_tables):
                return None

        attributes = dict(spec.attributes)
        for name, value in groups.items():
            if value is None or name in STRUCTURAL_GROUPS or name in spec.tag_groups:
                continue
            value = " ".join(value.split())
            attributes[name] = value.lower() if name in LOWERCASE_ATTRIBUTES else value

        tags = [
            f"{prefix}:{groups[group].lower()}"
            for group, prefix in spec.tag_groups.items()
            if groups.get(group)
        ]
        if tags:
            attributes["tags"] = tags

        hint = groups.get("hint")

        return CandidateMention(
            title=title,
            context_window=self._context_window(text, start, end),
            match_span=(start, end),
            hint=hint.lower() if hint else None,
            attributes=attributes,
            pattern=spec.name,
        )

    def _from_gazetteer(self, text: str, match: GazetteerMatch) -> CandidateMention:
        """Build a mention from a gazetteer match. Aliases map to the canonical name."""
        return CandidateMention(
            title=match.entry.name,
            context_window=self._context_window(text, match.start, match.end),
            match_span=(match.start, match.end),
            attributes=dict(match.entry.attributes),
            pattern="gazetteer",
        )

    def _clean_title(
        self,
        raw: str,
        offset: int,
        trim_stop_words: bool = True,
    ) -> tuple[str, int, int]:
        """Strip whitespace, trailing punctuation and leading stop words.

        Returns:
            The cleaned title and its (start, end) span in the source text.
        """
        stripped = raw.rstrip().rstrip(TRAILING_PUNCTUATION).rstrip()
        start = offset + len(stripped) - len(stripped.lstrip())
        stripped = stripped.strip()

        words = stripped.split()
        if trim_stop_words:
            while len(words) > 1 and words[0].lower() in self.tables.stop_words:
                cut = stripped.index(words[1], len(words[0]))
                start += cut
                stripped = stripped[cut:]
                words = words[1:]

        return " ".join(words), start, start + len(stripped)

    def is_valid_title(self, title: str, kind_tables: KindTables) -> bool:
        """Apply length, stop-word and excluded-word filters to a title."""
        if not self.config.min_title_length <= len(title) <= self.config.max_title_length:
            return False

        words = [w.strip("'’").lower() for w in title.split()]
        noise = self.tables.stop_words | self.tables.generic_words
        if all(w in noise for w in words):
            return False

        if any(w in kind_tables.excluded_words for w in words):
            return False

        return True

    def _context_window(self, text: str, start: int, end: int) -> str:
        width = self.config.context_window
        return text[max(0, start - width) : end + width]

    def _select(self, found: list[tuple[int, CandidateMention]]) -> list[CandidateMention]:
        """Order by (start, -length, pattern order) and drop overlapping spans."""
        ordered = sorted(found, key=lambda item: (item[1].start, -(item[1].end - item[1].start), item[0]))

        result = []
        last_end = -1

        for _, mention in ordered:
            if mention.start < last_end:
                continue

            result.append(mention)
            last_end = mention.end

        return result
