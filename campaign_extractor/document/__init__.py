"""Normalized document input records."""

from campaign_extractor.document.models import Heading, Image, Link, NormalizedDocument

__all__ = ["Heading", "Image", "Link", "NormalizedDocument"]
