"""Intermediate records passed between extraction stages."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from campaign_extractor.entities.schema import EntityKind


class CandidateMention(BaseModel):
    """A filtered textual occurrence of a candidate entity."""

    title: str
    context_window: str  # Slice of text around the match
    match_span: tuple[int, int]  # (start, end) of the title in the source text
    hint: Optional[str] = None  # Type noun captured next to the title
    attributes: dict[str, Any] = Field(default_factory=dict)
    pattern: str = ""  # Name of the pattern or gazetteer that produced it

    @property
    def start(self) -> int:
        return self.match_span[0]

    @property
    def end(self) -> int:
        return self.match_span[1]


class Candidate(BaseModel):
    """A classified mention waiting for deduplication."""

    kind: EntityKind
    title: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    source_sessions: list[int] = Field(default_factory=list)


class SessionContext(BaseModel):
    """Session information resolved for one document."""

    session_number: Optional[int] = None
    heading_text: Optional[str] = None  # Main heading the summary title comes from
    heading_level: Optional[int] = None

    @property
    def has_summary(self) -> bool:
        """A summary needs both a heading and a session number."""
        return self.session_number is not None and self.heading_text is not None


class GazetteerEntry(BaseModel):
    """A known campaign name."""

    name: str
    kind: EntityKind
    aliases: list[str] = Field(default_factory=list)
    attributes: dict[str, Any] = Field(default_factory=dict)

    @property
    def all_names(self) -> list[str]:
        """Get all names including aliases."""
        return [self.name] + self.aliases
