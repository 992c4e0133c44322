"""Shared fixtures for extraction tests."""

import re
import textwrap

import pytest

from campaign_extractor.document.models import Heading, NormalizedDocument
from campaign_extractor.extraction.tables.loader import TableLoader

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")

SESSION_NOTES = """\
# Session 1: A Friend in Need

The party arrived at the Yawning Portal tavern, where Durnan the barkeep served drinks. Bonnie, the barmaid, pointed out a half-orc named Yagra arm-wrestling in the corner.

Volo asked the party to find Floon Blagmaar. Volo said his friend had vanished somewhere in the Dock Ward district.

Talia drew her ancestral blade and the party headed out into Waterdeep, the greatest city of the Sword Coast.

## Synopsis

The adventurers met in Waterdeep and spent the evening drinking. Durnan kept the ale flowing while rumors spread about a missing noble. Volo offered a generous reward for help.
After some debate the heroes agreed to look into the matter first thing in the morning. They questioned several patrons, learned that a gang had been seen near the docks, and decided to rest before setting out.
Spirits were high despite the danger ahead, and everyone toasted to a successful hunt. The night ended with a brawl that nobody would ever admit to starting, and the whole tavern laughed about it for hours afterwards.
"""


def build_document(markdown: str) -> NormalizedDocument:
    """Normalize markdown the way the parsing stage does, for headings and text."""
    markdown = textwrap.dedent(markdown)
    lines = markdown.splitlines()
    headings = []
    text_lines = []

    # Frontmatter is not part of the text
    if lines and lines[0].strip() == "---":
        closing = [i for i, line in enumerate(lines[1:], start=1) if line.strip() == "---"]
        if closing:
            lines = lines[closing[0] + 1 :]

    in_fence = False
    for line in lines:
        if line.startswith(("```", "~~~")):
            in_fence = not in_fence
            continue

        match = None if in_fence else HEADING_PATTERN.match(line)
        if match:
            headings.append(Heading(level=len(match.group(1)), text=match.group(2)))
            text_lines.append(match.group(2))
        else:
            text_lines.append(line)

    return NormalizedDocument(
        raw=markdown,
        text="\n".join(text_lines).strip(),
        headings=headings,
    )


@pytest.fixture
def make_document():
    """Factory turning markdown into a NormalizedDocument."""
    return build_document


@pytest.fixture
def session_notes() -> str:
    """A complete set of session notes."""
    return SESSION_NOTES


@pytest.fixture(scope="session")
def tables():
    """Default extraction tables."""
    return TableLoader().load()
