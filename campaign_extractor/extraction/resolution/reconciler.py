"""Exact-title deduplication and session tagging."""

from typing import Optional

from campaign_extractor.entities.schema import ENTITY_MODELS, BaseEntity, EntityKind
from campaign_extractor.extraction.models import Candidate


class EntityReconciler:
    """Merge candidates that share a kind and title."""

    def reconcile(
        self,
        candidates: list[Candidate],
        session_number: Optional[int] = None,
    ) -> list[BaseEntity]:
        """Deduplicate candidates and stamp them with the session number.

        Args:
            candidates: Classified candidates in scan order.
            session_number: Session the document belongs to, if resolved.

        Returns:
            One entity per (kind, title), in first-occurrence order.

        Raises:
            ValueError: If a session summary candidate is passed in.
        """
        if not candidates:
            return []

        firsts: dict[tuple[EntityKind, str], Candidate] = {}
        sessions: dict[tuple[EntityKind, str], list[int]] = {}

        for candidate in candidates:
            if candidate.kind == EntityKind.SESSION_SUMMARY:
                raise ValueError("Session summaries cannot be reconciled")

            key = (candidate.kind, candidate.title)
            if key not in firsts:
                # First occurrence keeps its attributes
                firsts[key] = candidate
                sessions[key] = []

            for number in candidate.source_sessions:
                if number not in sessions[key]:
                    sessions[key].append(number)

        return [
            self._build_entity(candidate, sessions[key], session_number)
            for key, candidate in firsts.items()
        ]

    def _build_entity(
        self,
        candidate: Candidate,
        sessions: list[int],
        session_number: Optional[int],
    ) -> BaseEntity:
        """Build the entity model for a reconciled candidate."""
        source_sessions = list(sessions)
        if session_number is not None and session_number not in source_sessions:
            source_sessions.append(session_number)

        model = ENTITY_MODELS[candidate.kind]
        return model.model_validate(
            {
                **candidate.attributes,
                "kind": candidate.kind,
                "title": candidate.title,
                "sourceSessions": source_sessions or None,
            }
        )
