"""Extraction-specific configuration."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from campaign_extractor.core.config import settings


class ExtractorConfig(BaseModel):
    """Entity extractor configuration."""

    # Paths
    tables_dir: Path = settings.tables_dir
    campaign_gazetteer_dir: Optional[Path] = settings.campaign_gazetteer_dir

    # Scanning
    context_window: int = 60  # Characters on each side of a mention
    min_title_length: int = 3
    max_title_length: int = 60
    use_gazetteer: bool = True

    # Session summary
    synopsis_max_length: int = 500
    synopsis_min_length: int = 100
    synopsis_headings: list[str] = Field(
        default_factory=lambda: ["synopsis", "recap", "summary", "overview", "tl;dr"]
    )
    # Section titles that mark the notes as written up
    closing_markers: list[str] = Field(
        default_factory=lambda: [
            "synopsis",
            "summary",
            "recap",
            "conclusion",
            "epilogue",
            "aftermath",
            "wrap-up",
            "wrap up",
            "end of session",
        ]
    )
    complete_status: str = "complete"
    default_status: str = "draft"

    # NPC importance by number of whole-word mentions
    supporting_mentions: int = 2
    major_mentions: int = 5


# Default configuration
default_config = ExtractorConfig()
