"""
DeckInsight services.

Per-session state: build history, learned deck techs.
"""

from deckinsight.services.knowledge_base import KnowledgeBase
from deckinsight.services.sessions import SessionRegistry, SessionState

__all__ = [
    "KnowledgeBase",
    "SessionRegistry",
    "SessionState",
]
