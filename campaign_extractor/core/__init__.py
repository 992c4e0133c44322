"""Core configuration."""

from campaign_extractor.core.config import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
