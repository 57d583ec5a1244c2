from dataclasses import dataclass, field
from typing import Any

from deckinsight.models.ranking import FrequencyMap


@dataclass(frozen=True)
class HistoryEntry:
    """
    One deck the user has built, as recorded by the recommendation engine.

    Entries are appended and never mutated. Cards are stored as names only.
    """

    timestamp: str
    commander: str | None = None
    strategy: str | None = None
    name: str | None = None
    colors: tuple[str, ...] = ()
    cards: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation, empty fields omitted."""
        data: dict[str, Any] = {}
        if self.commander is not None:
            data["commander"] = self.commander
        if self.strategy is not None:
            data["strategy"] = self.strategy
        if self.name is not None:
            data["name"] = self.name
        if self.colors:
            data["colors"] = list(self.colors)
        if self.cards:
            data["cards"] = list(self.cards)
        data["timestamp"] = self.timestamp
        return data


@dataclass
class HistoryAnalysis:
    """Frequency summary of a user's build history."""

    total_decks: int
    commanders: FrequencyMap = field(default_factory=dict)
    strategies: FrequencyMap = field(default_factory=dict)
    colors: FrequencyMap = field(default_factory=dict)
    most_played_commander: str | None = None
    favorite_strategy: str | None = None
    favorite_colors: str | None = None


@dataclass(frozen=True)
class Staple:
    """A card that shows up in more than one recorded deck."""

    name: str
    appearances: int


@dataclass(frozen=True)
class Gap:
    """An unexplored area of deck building (`type` is "colors" or "strategies")."""

    type: str
    description: str
    suggestion: str


@dataclass
class RecommendationBundle:
    """Personalized recommendations grouped by intent."""

    build_on_strengths: list[str] = field(default_factory=list)
    explore_new: list[str] = field(default_factory=list)
    upgrades: list[str] = field(default_factory=list)
    budget_options: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class BudgetPlaceholder:
    original: str
    needs_pricing_data: bool = True


@dataclass
class BudgetSubstitutionReport:
    """Budget substitutions need pricing data; this report says so explicitly."""

    note: str
    suggestion: str
    placeholders: list[BudgetPlaceholder] = field(default_factory=list)


@dataclass(frozen=True)
class ArchetypeSuggestion:
    archetype: str
    reason: str
