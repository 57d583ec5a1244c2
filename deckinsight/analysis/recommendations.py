"""
Personalized recommendations from a user's build history.

The RecommendationEngine owns an append-only list of HistoryEntry records.
Create one engine per user session; engines share nothing.

Recommendations come in four buckets:
- build_on_strengths: reinforce the favorite strategy and colors
- explore_new: colors and archetypes the user has not tried
- upgrades: recurring staples worth owning in premium versions
- budget_options: unavailable until a pricing data source is integrated
"""

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from deckinsight.analysis.aggregator import build_frequency_map, most_common, top_n
from deckinsight.analysis.colors import color_combo_key, color_name, unplayed_colors
from deckinsight.models.failure import HistoryImportError
from deckinsight.models.history import (
    ArchetypeSuggestion,
    BudgetPlaceholder,
    BudgetSubstitutionReport,
    Gap,
    HistoryAnalysis,
    HistoryEntry,
    RecommendationBundle,
    Staple,
)
from deckinsight.models.profile import UserPattern

logger = logging.getLogger(__name__)

# Archetypes checked for gaps, in suggestion order
KNOWN_STRATEGIES: tuple[str, ...] = (
    "aggro",
    "control",
    "combo",
    "midrange",
    "tribal",
    "voltron",
    "aristocrats",
    "tokens",
    "spellslinger",
)

# Gap descriptions list at most this many unexplored items per kind
MAX_GAP_ITEMS = 3

BUDGET_UNAVAILABLE_NOTE = "Budget substitution feature requires pricing data integration"
BUDGET_UNAVAILABLE_SUGGESTION = (
    "This will be available once TCGPlayer or CardKingdom API integration is added"
)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


def _card_name(card: Any) -> str | None:
    """Cards are recorded as plain names or mappings with a `name` key."""
    if isinstance(card, str):
        return card
    if isinstance(card, Mapping):
        name = card.get("name")
        return name if isinstance(name, str) else None
    return None


_TEXT_FIELDS = ("commander", "strategy", "name", "timestamp")
_LIST_FIELDS = ("colors", "cards")


def _invalid_field(item: Mapping[str, Any]) -> str | None:
    """Name of the first field an imported entry has with the wrong type."""
    for key in _TEXT_FIELDS:
        if item.get(key) is not None and not isinstance(item[key], str):
            return key
    for key in _LIST_FIELDS:
        if item.get(key) is not None and not isinstance(item[key], list):
            return key
    return None


def _entry_from_mapping(deck: Mapping[str, Any], timestamp: str) -> HistoryEntry:
    cards = tuple(name for name in (_card_name(card) for card in deck.get("cards") or []) if name)
    colors = tuple(letter for letter in deck.get("colors") or [] if isinstance(letter, str))
    return HistoryEntry(
        timestamp=timestamp,
        commander=deck.get("commander"),
        strategy=deck.get("strategy"),
        name=deck.get("name"),
        colors=colors,
        cards=cards,
    )


class RecommendationEngine:
    """
    Build history plus the analyses derived from it.

    Not thread-safe. Give each session its own instance.
    """

    def __init__(self, clock: Callable[[], str] = _utc_now) -> None:
        self._history: list[HistoryEntry] = []
        self._clock = clock

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        """Recorded entries, oldest first."""
        return tuple(self._history)

    def add_to_history(self, deck: Mapping[str, Any]) -> HistoryEntry:
        """
        Record a deck the user built.

        Args:
            deck: Mapping with optional `commander`, `strategy`, `name`,
                `colors` (letters) and `cards` (names or {"name": ...})

        Returns:
            The stored entry, timestamped now
        """
        entry = _entry_from_mapping(deck, self._clock())
        self._history.append(entry)
        logger.debug(
            "Recorded deck %r (%d entries)", entry.name or entry.commander, len(self._history)
        )
        return entry

    def clear_history(self) -> None:
        self._history = []

    def export_history(self) -> str:
        """Serialize the history as a JSON array."""
        return json.dumps([entry.to_dict() for entry in self._history], indent=2)

    def import_history(self, payload: str) -> None:
        """
        Replace the history with a previously exported snapshot.

        Strict: the current history is kept unless the whole payload is valid.

        Raises:
            HistoryImportError: If the payload is not valid JSON, is not an
                array, contains items that are not objects, or an item has a
                text field that is not a string or a list field that is not
                a list
        """
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise HistoryImportError(str(e)) from e

        if not isinstance(data, list):
            raise HistoryImportError("expected a JSON array")

        entries: list[HistoryEntry] = []
        for index, item in enumerate(data):
            if not isinstance(item, Mapping):
                raise HistoryImportError(f"item {index} is not an object")
            bad_field = _invalid_field(item)
            if bad_field is not None:
                raise HistoryImportError(f"item {index} has an invalid {bad_field!r}")
            entries.append(_entry_from_mapping(item, item.get("timestamp") or self._clock()))

        self._history = entries
        logger.info("Imported %d history entries", len(entries))

    def analyze_history(self) -> HistoryAnalysis:
        """Frequency summary of commanders, strategies and color combos."""
        commanders = build_frequency_map(
            entry.commander for entry in self._history if entry.commander
        )
        strategies = build_frequency_map(
            entry.strategy for entry in self._history if entry.strategy
        )
        colors = build_frequency_map(
            color_combo_key(entry.colors) for entry in self._history if entry.colors
        )

        top_commander = most_common(commanders)
        top_strategy = most_common(strategies)
        top_colors = most_common(colors)

        return HistoryAnalysis(
            total_decks=len(self._history),
            commanders=commanders,
            strategies=strategies,
            colors=colors,
            most_played_commander=top_commander.name if top_commander else None,
            favorite_strategy=top_strategy.name if top_strategy else None,
            favorite_colors=top_colors.name if top_colors else None,
        )

    def identify_staples(self) -> list[Staple]:
        """Cards recorded more than once across the history, most frequent first."""
        frequency = build_frequency_map(card for entry in self._history for card in entry.cards)
        return [
            Staple(name=ranked.name, appearances=ranked.count)
            for ranked in top_n(frequency)
            if ranked.count > 1
        ]

    def identify_gaps(self, profile: UserPattern | None = None) -> list[Gap]:
        """
        Colors and strategies the user has not explored.

        Args:
            profile: Optional profile pattern; its color combos count as played

        Returns:
            Up to one color gap and one strategy gap
        """
        gaps: list[Gap] = []
        history = self.analyze_history()

        combo_keys: list[str] = list(history.colors)
        if profile is not None:
            combo_keys.extend(entry.name for entry in profile.top_color_combos)

        missing_colors = unplayed_colors(combo_keys)
        if missing_colors:
            first = missing_colors[0]
            gaps.append(
                Gap(
                    type="colors",
                    description=f"Haven't explored: {', '.join(missing_colors[:MAX_GAP_ITEMS])}",
                    suggestion=f"Try building with {first} ({color_name(first)})",
                )
            )

        missing_strategies = [s for s in KNOWN_STRATEGIES if s not in history.strategies]
        if missing_strategies:
            gaps.append(
                Gap(
                    type="strategies",
                    description=(
                        "Unexplored strategies: "
                        f"{', '.join(missing_strategies[:MAX_GAP_ITEMS])}"
                    ),
                    suggestion=f"Consider trying a {missing_strategies[0]} deck",
                )
            )

        return gaps

    def generate_recommendations(self, profile: UserPattern | None = None) -> RecommendationBundle:
        """Personalized recommendations in four buckets."""
        history = self.analyze_history()
        staples = self.identify_staples()
        gaps = self.identify_gaps(profile)

        bundle = RecommendationBundle()

        if history.favorite_strategy:
            count = history.strategies[history.favorite_strategy]
            bundle.build_on_strengths.append(
                f"Continue exploring {history.favorite_strategy} - "
                f"you've built {count} decks in this style"
            )
        if history.favorite_colors:
            bundle.build_on_strengths.append(
                f"Try new commanders in your favorite colors: {history.favorite_colors}"
            )

        bundle.explore_new = [gap.suggestion for gap in gaps]

        if staples:
            names = ", ".join(staple.name for staple in staples[:3])
            bundle.upgrades.append(f"You frequently use these cards: {names}")
            bundle.upgrades.append("Consider acquiring premium versions or finding alternatives")

        bundle.budget_options.append(
            f"{BUDGET_UNAVAILABLE_NOTE}. {BUDGET_UNAVAILABLE_SUGGESTION}"
        )

        return bundle

    def suggest_budget_substitutions(self, cards: Iterable[str]) -> BudgetSubstitutionReport:
        """
        Budget alternatives for expensive cards.

        No pricing source is integrated, so every card is returned as a
        placeholder flagged as needing pricing data.
        """
        return BudgetSubstitutionReport(
            note=BUDGET_UNAVAILABLE_NOTE,
            suggestion=BUDGET_UNAVAILABLE_SUGGESTION,
            placeholders=[BudgetPlaceholder(original=card) for card in cards],
        )

    def suggest_new_archetype(self) -> ArchetypeSuggestion:
        """Single next step, taken from the first gap."""
        gaps = self.identify_gaps()
        if gaps:
            return ArchetypeSuggestion(archetype=gaps[0].suggestion, reason=gaps[0].description)
        return ArchetypeSuggestion(
            archetype="Try something completely different",
            reason="Expand your deck building repertoire",
        )
