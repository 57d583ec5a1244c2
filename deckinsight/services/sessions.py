"""
Per-session state.

Each session id gets its own RecommendationEngine and KnowledgeBase so
sessions never see each other's history. The registry itself is owned by
whoever serves the sessions (the FastAPI app keeps one on `app.state`).
"""

import logging
from dataclasses import dataclass, field
from threading import Lock

from deckinsight.analysis.recommendations import RecommendationEngine
from deckinsight.services.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    engine: RecommendationEngine = field(default_factory=RecommendationEngine)
    knowledge: KnowledgeBase = field(default_factory=KnowledgeBase)


class SessionRegistry:
    """Maps session ids to their isolated state."""

    def __init__(self) -> None:
        self._sessions: dict[str, SessionState] = {}
        # Guards the mapping only; a session's engine is not thread-safe
        self._lock = Lock()

    def get(self, session_id: str) -> SessionState:
        """Return the session's state, creating it on first use."""
        with self._lock:
            state = self._sessions.get(session_id)
            if state is None:
                logger.debug("Creating session %s", session_id)
                state = SessionState()
                self._sessions[session_id] = state
            return state

    def drop(self, session_id: str) -> bool:
        """Forget a session. Returns False if it did not exist."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
