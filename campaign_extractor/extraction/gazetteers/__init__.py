"""Campaign gazetteer loading and matching."""

from campaign_extractor.extraction.gazetteers.loader import GazetteerLoader
from campaign_extractor.extraction.gazetteers.matcher import GazetteerMatch, GazetteerMatcher

__all__ = ["GazetteerLoader", "GazetteerMatch", "GazetteerMatcher"]
