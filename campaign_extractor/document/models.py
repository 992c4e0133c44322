"""Normalized document records produced by the document parsing stage."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class Heading(BaseModel):
    """A markdown heading."""

    level: int = Field(ge=1, le=6)
    text: str
    id: str = ""  # Anchor slug assigned by the parser


class Link(BaseModel):
    """A hyperlink found in the document."""

    text: str
    url: str
    type: Literal["inline", "reference"] = "inline"


class Image(BaseModel):
    """An embedded image reference."""

    alt: str = ""
    url: str
    title: Optional[str] = None


class NormalizedDocument(BaseModel):
    """Markdown content after normalization.

    The extractor only reads this record; the parsing collaborator owns it.
    """

    raw: str = ""  # Original markdown source
    html: str = ""
    text: str = ""  # Plain text with markup removed
    frontmatter: dict[str, str] = Field(default_factory=dict)
    headings: list[Heading] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)

    @property
    def plain_text(self) -> str:
        return self.text

    @property
    def is_empty(self) -> bool:
        """True when there is no text to extract from."""
        return not self.text.strip()
