"""Entity deduplication and session tagging."""

from campaign_extractor.extraction.resolution.reconciler import EntityReconciler

__all__ = ["EntityReconciler"]
