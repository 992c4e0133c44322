"""Candidate extractors."""

from campaign_extractor.extraction.extractors.scanner import CandidateScanner

__all__ = ["CandidateScanner"]
