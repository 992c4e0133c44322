"""Exact gazetteer matching with an Aho-Corasick automaton."""

from typing import Optional

import ahocorasick

from campaign_extractor.entities.schema import EntityKind
from campaign_extractor.extraction.models import GazetteerEntry


class GazetteerMatch:
    """A match from the gazetteer."""

    def __init__(
        self,
        entry: GazetteerEntry,
        matched_text: str,
        start: int,
        end: int,
    ):
        self.entry = entry
        self.matched_text = matched_text  # Surface form, possibly an alias
        self.start = start
        self.end = end

    @property
    def length(self) -> int:
        return self.end - self.start


class GazetteerMatcher:
    """Case-sensitive, word-bounded matching of known names and aliases."""

    def __init__(self):
        self.automaton = ahocorasick.Automaton()
        self.entries: list[GazetteerEntry] = []
        self._built = False

    def load_entries(self, entries: list[GazetteerEntry]) -> None:
        """Load gazetteer entries and build the automaton.

        A name declared twice resolves to the entry loaded last.
        """
        for entry in entries:
            index = len(self.entries)
            self.entries.append(entry)

            for name in entry.all_names:
                if name:
                    self.automaton.add_word(name, (index, name))

        if len(self.automaton) > 0:
            self.automaton.make_automaton()
            self._built = True

    def find_all(self, text: str, kind: Optional[EntityKind] = None) -> list[GazetteerMatch]:
        """Find non-overlapping matches in text, optionally for one kind.

        Args:
            text: Text to search.
            kind: Only report entries of this kind.

        Returns:
            Matches ordered by position; longer matches win overlaps.
        """
        if not self._built:
            return []

        matches = []

        for end_idx, (index, matched_name) in self.automaton.iter(text):
            entry = self.entries[index]
            if kind is not None and entry.kind != kind:
                continue

            start_idx = end_idx - len(matched_name) + 1
            end_pos = end_idx + 1  # Exclusive end position

            # Check word boundaries to avoid partial matches
            if self._check_word_boundary(text, start_idx, end_pos):
                matches.append(
                    GazetteerMatch(
                        entry=entry,
                        matched_text=text[start_idx:end_pos],
                        start=start_idx,
                        end=end_pos,
                    )
                )

        return self._deduplicate_matches(matches)

    def _check_word_boundary(self, text: str, start: int, end: int) -> bool:
        """Check if match is at word boundaries."""
        if start > 0 and text[start - 1].isalnum():
            return False
        if end < len(text) and text[end].isalnum():
            return False
        return True

    def _deduplicate_matches(self, matches: list[GazetteerMatch]) -> list[GazetteerMatch]:
        """Remove overlapping matches, keeping the earliest and longest."""
        sorted_matches = sorted(matches, key=lambda m: (m.start, -m.length))

        result = []
        last_end = -1

        for match in sorted_matches:
            if match.start < last_end:
                continue

            result.append(match)
            last_end = match.end

        return result
