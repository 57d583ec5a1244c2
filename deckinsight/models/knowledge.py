from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class KnowledgeEntry:
    """
    A deck tech learned from an external source (video, article).

    Attributes:
        title: Title of the source
        author: Creator of the source
        url: Where it came from
        commander: Commander featured, if any
        strategy: Strategy described, if any
        cards: Card names of the linked deck, empty if no deck was linked
    """

    title: str
    author: str = ""
    url: str = ""
    commander: str | None = None
    strategy: str | None = None
    cards: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "url": self.url,
            "commander": self.commander,
            "strategy": self.strategy,
            "cards": list(self.cards),
        }


@dataclass
class KnowledgeSummary:
    """Short description of a knowledge entry."""

    video: str
    creator: str
    commander: str | None = None
    strategy: str | None = None
    deck_available: bool = False
    card_count: int = 0
