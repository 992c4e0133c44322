"""Session context resolution."""

from campaign_extractor.extraction.session.resolver import Section, SessionContextResolver

__all__ = ["Section", "SessionContextResolver"]
