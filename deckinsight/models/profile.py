from dataclasses import dataclass, field
from typing import Any

from deckinsight.models.card import CardEntry
from deckinsight.models.ranking import FrequencyMap, RankedEntry


@dataclass
class UserPattern:
    """
    Aggregated deck-building patterns for one user.

    Attributes:
        formats: format -> number of decks
        commanders: commander name -> number of decks
        colors: color combo key (e.g., "BG") -> number of decks
        favorite_format: Most common format, None if no decks
        top_commanders: Up to 5 most played commanders
        top_color_combos: Up to 5 most played color combos
    """

    formats: FrequencyMap = field(default_factory=dict)
    commanders: FrequencyMap = field(default_factory=dict)
    colors: FrequencyMap = field(default_factory=dict)
    favorite_format: str | None = None
    top_commanders: list[RankedEntry] = field(default_factory=list)
    top_color_combos: list[RankedEntry] = field(default_factory=list)


@dataclass(frozen=True)
class DeckLink:
    """A deck listed on a player page."""

    id: str
    name: str


@dataclass
class ScrapedDeck:
    """Deck contents extracted from a deck page."""

    commander: str | None = None
    mainboard: list[CardEntry] = field(default_factory=list)
    sideboard: list[CardEntry] = field(default_factory=list)


@dataclass
class MoxfieldProfile:
    """Public decks of a Moxfield user with their aggregated pattern."""

    username: str
    total_decks: int
    decks: list[dict[str, Any]]
    pattern: UserPattern


@dataclass
class GoldfishProfile:
    """
    Coarse profile scraped from an MTGGoldfish player page.

    Only commanders are known for the analyzed decks; there is no color data.
    """

    username: str
    total_decks: int
    analyzed_decks: int
    top_commanders: list[RankedEntry] = field(default_factory=list)
    decks: list[ScrapedDeck] = field(default_factory=list)


@dataclass
class DeckCardList:
    """Card list of a single Moxfield deck, split by board."""

    commanders: list[CardEntry] = field(default_factory=list)
    mainboard: list[CardEntry] = field(default_factory=list)


@dataclass
class ProfileAnalysis:
    """Insights and recommendations for one user profile."""

    platform: str
    username: str
    total_decks: int
    insights: list[str]
    recommendations: list[str]
    pattern: UserPattern | None = None
    analyzed_decks: int | None = None
    top_commanders: list[RankedEntry] = field(default_factory=list)


@dataclass
class ProfileComparison:
    similarities: list[str] = field(default_factory=list)
    differences: list[str] = field(default_factory=list)
