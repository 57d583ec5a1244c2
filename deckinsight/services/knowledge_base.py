"""
Knowledge base of learned deck techs.

Entries describe deck techs picked up from videos or articles: who made
them, which commander and strategy they cover, and the linked deck's cards.

Import here is best-effort. A payload that is not valid JSON, or not a JSON
array, leaves an empty knowledge base and logs a warning instead of
raising. RecommendationEngine.import_history, by contrast, rejects bad
payloads.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from deckinsight.models.knowledge import KnowledgeEntry, KnowledgeSummary

logger = logging.getLogger(__name__)


def _entry_from_mapping(item: Mapping[str, Any]) -> KnowledgeEntry | None:
    title = item.get("title")
    if not isinstance(title, str) or not title:
        return None
    cards = tuple(card for card in item.get("cards") or [] if isinstance(card, str))
    return KnowledgeEntry(
        title=title,
        author=item.get("author") or "",
        url=item.get("url") or "",
        commander=item.get("commander"),
        strategy=item.get("strategy"),
        cards=cards,
    )


class KnowledgeBase:
    """In-memory collection of KnowledgeEntry records, one per session."""

    def __init__(self) -> None:
        self._entries: list[KnowledgeEntry] = []

    @property
    def entries(self) -> tuple[KnowledgeEntry, ...]:
        return tuple(self._entries)

    def add(self, entry: KnowledgeEntry) -> KnowledgeSummary:
        """Store an entry and return its summary."""
        self._entries.append(entry)
        return self.summarize(entry)

    def summarize(self, entry: KnowledgeEntry) -> KnowledgeSummary:
        return KnowledgeSummary(
            video=entry.title,
            creator=entry.author,
            commander=entry.commander,
            strategy=entry.strategy,
            deck_available=bool(entry.cards),
            card_count=len(entry.cards),
        )

    def search_by_commander(self, commander: str) -> list[KnowledgeEntry]:
        """Entries whose commander contains the query (case-insensitive)."""
        needle = commander.lower()
        return [e for e in self._entries if e.commander and needle in e.commander.lower()]

    def search_by_strategy(self, strategy: str) -> list[KnowledgeEntry]:
        """Entries whose strategy contains the query (case-insensitive)."""
        needle = strategy.lower()
        return [e for e in self._entries if e.strategy and needle in e.strategy.lower()]

    def export_knowledge(self) -> str:
        return json.dumps([entry.to_dict() for entry in self._entries], indent=2)

    def import_knowledge(self, payload: str) -> int:
        """
        Replace the knowledge base from an exported JSON array.

        Malformed JSON or a non-array payload results in an empty knowledge
        base. Array items without a title are skipped.

        Returns:
            Number of entries loaded
        """
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            logger.warning("Knowledge import is not valid JSON, starting empty: %s", e)
            data = []

        if not isinstance(data, list):
            logger.warning("Knowledge import is not an array, starting empty")
            data = []

        entries = [
            entry
            for entry in (_entry_from_mapping(item) for item in data if isinstance(item, Mapping))
            if entry is not None
        ]
        self._entries = entries
        logger.info("Imported %d knowledge entries", len(entries))
        return len(entries)
