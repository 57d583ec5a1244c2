from deckinsight.api.decks import router as decks_router
from deckinsight.api.health import router as health_router
from deckinsight.api.meta import router as meta_router
from deckinsight.api.profiles import router as profiles_router
from deckinsight.api.sessions import router as sessions_router

__all__ = [
    "decks_router",
    "health_router",
    "meta_router",
    "profiles_router",
    "sessions_router",
]
