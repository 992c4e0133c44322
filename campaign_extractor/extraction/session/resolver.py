"""Session number, title, status and synopsis resolution."""

import re
from pathlib import PurePath
from typing import Optional

from pydantic import BaseModel, Field

from campaign_extractor.document.models import Heading, NormalizedDocument
from campaign_extractor.entities.schema import SessionSummary
from campaign_extractor.extraction.config import ExtractorConfig, default_config
from campaign_extractor.extraction.models import SessionContext


class Section(BaseModel):
    """A heading and the raw lines up to the next heading."""

    level: int  # 0 for text before the first heading
    title: str
    lines: list[str] = Field(default_factory=list)

    @property
    def body(self) -> str:
        """Non-empty lines joined with single spaces."""
        return " ".join(line.strip() for line in self.lines if line.strip())

    @property
    def first_paragraph(self) -> str:
        """The first block of consecutive non-empty lines."""
        block: list[str] = []
        for line in self.lines:
            if line.strip():
                block.append(line.strip())
            elif block:
                break
        return " ".join(block)


class SessionContextResolver:
    """Resolve which session a document describes and summarize it."""

    # "session_summary_5.md", "Session-10.md", "session 3 notes.md"
    FILENAME_PATTERN = re.compile(r"session[_\s-]*(?:summary[_\s-]*)?(\d+)", re.IGNORECASE)

    # "Session 5", "Session #5"
    HEADING_SESSION_PATTERN = re.compile(r"session\s*#?\s*(\d+)", re.IGNORECASE)
    STANDALONE_NUMBER_PATTERN = re.compile(r"\b(\d+)\b")

    # "Session 1:", "Part 2 -", "3." prefixes in front of the real title
    TITLE_PREFIX_PATTERN = re.compile(
        r"^\s*(?:(?:session|part|chapter|episode)\s*#?\s*)?\d+\b\s*[.:)\-–—]*\s*",
        re.IGNORECASE,
    )

    ATX_HEADING_PATTERN = re.compile(r"^\s{0,3}(#{1,6})\s+(.+?)\s*#*\s*$")
    FENCE_PATTERN = re.compile(r"^\s{0,3}(```|~~~)")
    SENTENCE_END_PATTERN = re.compile(r"[.!?](?=\s)")

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or default_config

    def resolve(self, filename: str, headings: list[Heading]) -> SessionContext:
        """Resolve the session number and main heading.

        The filename wins over the heading. Within the heading an explicit
        "Session N" wins over the first standalone number.

        Args:
            filename: Source file name or path; may be empty.
            headings: Document headings in order.

        Returns:
            SessionContext, possibly with neither number nor heading.
        """
        main = self._main_heading(headings)

        session_number = self._number_from_filename(filename)
        if session_number is None and main is not None:
            session_number = self._number_from_heading(main.text)

        return SessionContext(
            session_number=session_number,
            heading_text=main.text if main else None,
            heading_level=main.level if main else None,
        )

    def build_summary(
        self,
        context: SessionContext,
        document: NormalizedDocument,
    ) -> Optional[SessionSummary]:
        """Build the session summary entity.

        Args:
            context: Resolved session context.
            document: Normalized document; sections are read from its raw markdown.

        Returns:
            SessionSummary, or None without both a main heading and a number.
        """
        if not context.has_summary:
            return None

        sections = self.parse_sections(document.raw)
        main_index = self._main_section_index(sections, context)
        later = sections[main_index + 1 :] if main_index is not None else []

        full_summary = self._full_summary(sections, main_index, later)

        return SessionSummary(
            title=self.clean_title(context.heading_text),
            session_number=context.session_number,
            status=self._status(later),
            brief_synopsis=self.truncate_synopsis(full_summary) if full_summary else None,
            full_summary=full_summary or None,
        )

    def clean_title(self, heading_text: str) -> str:
        """Remove a "Session N:" style prefix, keeping bare "Session N" headings."""
        title = self.TITLE_PREFIX_PATTERN.sub("", heading_text, count=1).strip()
        return title or heading_text.strip()

    def truncate_synopsis(self, text: str) -> str:
        """Shorten text to the configured synopsis bounds.

        Prefers the longest prefix ending at a sentence end that is at least
        the minimum length; otherwise cuts at the last word boundary.
        """
        max_length = self.config.synopsis_max_length
        if len(text) <= max_length:
            return text

        window = text[: max_length + 1]
        sentence_ends = [
            m.end()
            for m in self.SENTENCE_END_PATTERN.finditer(window)
            if self.config.synopsis_min_length <= m.end() <= max_length
        ]
        if sentence_ends:
            return text[: sentence_ends[-1]]

        cut = max(window.rfind(" "), window.rfind("\n"), window.rfind("\t"))
        if cut > 0:
            return text[:cut].rstrip()

        return text[:max_length]

    def parse_sections(self, raw: str) -> list[Section]:
        """Split markdown into heading sections, skipping frontmatter and code fences."""
        lines = raw.splitlines()

        # YAML frontmatter block
        if lines and lines[0].strip() == "---":
            for i, line in enumerate(lines[1:], start=1):
                if line.strip() in ("---", "..."):
                    lines = lines[i + 1 :]
                    break

        sections = [Section(level=0, title="")]
        in_fence = False

        for line in lines:
            if self.FENCE_PATTERN.match(line):
                in_fence = not in_fence
            elif not in_fence:
                heading = self.ATX_HEADING_PATTERN.match(line)
                if heading:
                    sections.append(Section(level=len(heading.group(1)), title=heading.group(2)))
                    continue

            sections[-1].lines.append(line)

        return sections

    def _main_heading(self, headings: list[Heading]) -> Optional[Heading]:
        """First level-1 heading, else first level-2 heading."""
        for level in (1, 2):
            for heading in headings:
                if heading.level == level:
                    return heading
        return None

    def _number_from_filename(self, filename: str) -> Optional[int]:
        if not filename:
            return None

        match = self.FILENAME_PATTERN.search(PurePath(filename.replace("\\", "/")).name)
        return int(match.group(1)) if match else None

    def _number_from_heading(self, text: str) -> Optional[int]:
        match = self.HEADING_SESSION_PATTERN.search(text) or self.STANDALONE_NUMBER_PATTERN.search(text)
        return int(match.group(1)) if match else None

    def _main_section_index(self, sections: list[Section], context: SessionContext) -> Optional[int]:
        """Locate the main heading in the raw sections."""
        for i, section in enumerate(sections):
            if section.level == context.heading_level and section.title.strip() == context.heading_text.strip():
                return i

        # Parsed heading text may differ from the raw markup
        for i, section in enumerate(sections):
            if 1 <= section.level <= 2:
                return i

        return None

    def _full_summary(
        self,
        sections: list[Section],
        main_index: Optional[int],
        later: list[Section],
    ) -> str:
        """Body of the first synopsis section, else the first paragraph after the main heading."""
        keywords = [k.lower() for k in self.config.synopsis_headings]

        for section in later:
            title = section.title.lower()
            if any(k in title for k in keywords) and section.body:
                return section.body

        if main_index is None:
            return ""

        for section in sections[main_index:]:
            paragraph = section.first_paragraph
            if paragraph:
                return paragraph

        return ""

    def _status(self, later: list[Section]) -> str:
        """Complete once a closing section has content."""
        markers = [m.lower() for m in self.config.closing_markers]

        for section in later:
            title = section.title.lower()
            if any(m in title for m in markers) and section.body:
                return self.config.complete_status

        return self.config.default_status
