"""
Profile insight generation.

Turns aggregated deck-building patterns into readable insights and
exploration recommendations. Two profile sources are supported:

- Moxfield: full pattern (formats, commanders, color identities)
- MTGGoldfish: coarse pattern (deck count and commanders, no colors)

Pattern mining goes through the shared aggregator so commander and color
rankings break ties the same way as everything else.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from deckinsight.analysis.aggregator import build_frequency_map, most_common, top_n
from deckinsight.analysis.colors import color_combo_key, color_name, unplayed_colors
from deckinsight.models.failure import FetchResult, ProfileAnalysisError
from deckinsight.models.profile import (
    GoldfishProfile,
    MoxfieldProfile,
    ProfileAnalysis,
    ProfileComparison,
    UserPattern,
)

logger = logging.getLogger(__name__)

TOP_PATTERN_LIMIT = 5

GENERAL_RECOMMENDATIONS = (
    "Consider exploring different archetypes to expand your deck building skills",
    "Build decks at different power levels for various playgroups",
)

GOLDFISH_GENERAL_RECOMMENDATIONS = (
    "Explore the current meta to discover powerful new strategies",
    "Try budget builds to challenge your deck building creativity",
)


class MoxfieldProfileSource(Protocol):
    def get_user_profile(self, username: str) -> FetchResult[MoxfieldProfile]: ...


class GoldfishProfileSource(Protocol):
    def analyze_user_profile(self, username: str) -> FetchResult[GoldfishProfile]: ...


def _commander_names(deck: Mapping[str, Any]) -> Iterable[str]:
    for commander in deck.get("commanders") or []:
        card = commander.get("card") if isinstance(commander, Mapping) else None
        name = card.get("name") if isinstance(card, Mapping) else None
        yield name or "Unknown"


def build_user_pattern(decks: Iterable[Mapping[str, Any]]) -> UserPattern:
    """
    Aggregate deck payloads into a UserPattern.

    Args:
        decks: Deck records exposing `format`, `commanders` (each with a
            nested `card.name`) and `colorIdentity` (list of letters)

    Returns:
        UserPattern with frequency maps and top-5 rankings
    """
    decks = list(decks)

    formats = build_frequency_map(deck.get("format") or "unknown" for deck in decks)
    commanders = build_frequency_map(name for deck in decks for name in _commander_names(deck))
    # Decks without a color identity do not contribute a combo
    colors = build_frequency_map(
        color_combo_key(deck.get("colorIdentity") or []) for deck in decks
    )

    favorite = most_common(formats)

    return UserPattern(
        formats=formats,
        commanders=commanders,
        colors=colors,
        favorite_format=favorite.name if favorite else None,
        top_commanders=top_n(commanders, TOP_PATTERN_LIMIT),
        top_color_combos=top_n(colors, TOP_PATTERN_LIMIT),
    )


def format_color_identity(colors: str | None) -> str:
    """Render a combo key as full names: "UW" -> "Blue/White"."""
    if not colors:
        return "Colorless"
    return "/".join(color_name(letter) for letter in colors)


def generate_insights(pattern: UserPattern) -> list[str]:
    """Insights about a user's preferences, most significant first."""
    insights: list[str] = []

    if pattern.favorite_format:
        insights.append(f"Primary format: {pattern.favorite_format}")

    if pattern.top_commanders:
        top_commander = pattern.top_commanders[0]
        insights.append(
            f"Most played commander: {top_commander.name} ({top_commander.count} decks)"
        )
        if len(pattern.top_commanders) > 1:
            others = ", ".join(entry.name for entry in pattern.top_commanders[1:3])
            insights.append(f"Also frequently plays: {others}")

    if pattern.top_color_combos:
        top_colors = pattern.top_color_combos[0]
        insights.append(
            f"Favorite color combination: {format_color_identity(top_colors.name)} "
            f"({top_colors.count} decks)"
        )

    return insights


def generate_recommendations(pattern: UserPattern) -> list[str]:
    """
    Exploration recommendations for a Moxfield-style pattern.

    Color letters no recorded combo uses are named in one line, in WUBRG
    order. RecommendationEngine.identify_gaps turns the same letters into
    per-color suggestions.
    """
    recommendations: list[str] = []

    if pattern.top_color_combos:
        missing = unplayed_colors(entry.name for entry in pattern.top_color_combos)
        if missing:
            names = " or ".join(color_name(letter) for letter in missing)
            recommendations.append(f"Try exploring {names} colors")

    recommendations.extend(GENERAL_RECOMMENDATIONS)
    return recommendations


def generate_goldfish_insights(profile: GoldfishProfile) -> list[str]:
    """Insights for the coarse MTGGoldfish profile."""
    insights = [
        f"Total decks on MTGGoldfish: {profile.total_decks}",
        f"Analyzed {profile.analyzed_decks} recent decks",
    ]
    for commander in profile.top_commanders:
        insights.append(f"Plays {commander.name} ({commander.count} times)")
    return insights


def generate_goldfish_recommendations(profile: GoldfishProfile) -> list[str]:
    recommendations: list[str] = []
    if profile.top_commanders:
        recommendations.append("Consider building with less-played commanders for unique gameplay")
    recommendations.extend(GOLDFISH_GENERAL_RECOMMENDATIONS)
    return recommendations


def compare_profiles(first: UserPattern, second: UserPattern) -> ProfileComparison:
    """Find commanders both players favor."""
    comparison = ProfileComparison()

    second_names = {entry.name for entry in second.top_commanders}
    shared = [entry.name for entry in first.top_commanders if entry.name in second_names]
    if shared:
        comparison.similarities.append(f"Both players enjoy: {', '.join(shared)}")

    return comparison


def analyze_moxfield_profile(username: str, source: MoxfieldProfileSource) -> ProfileAnalysis:
    """
    Analyze a Moxfield user's public decks.

    Raises:
        ProfileAnalysisError: If the profile could not be fetched
    """
    logger.info("Analyzing Moxfield profile: %s...", username)

    result = source.get_user_profile(username)
    if not result.is_ok:
        raise ProfileAnalysisError("Moxfield", str(result.error))
    profile = result.unwrap()

    return ProfileAnalysis(
        platform="Moxfield",
        username=username,
        total_decks=profile.total_decks,
        pattern=profile.pattern,
        top_commanders=profile.pattern.top_commanders,
        insights=generate_insights(profile.pattern),
        recommendations=generate_recommendations(profile.pattern),
    )


def analyze_goldfish_profile(username: str, source: GoldfishProfileSource) -> ProfileAnalysis:
    """
    Analyze an MTGGoldfish player's recent decks.

    Raises:
        ProfileAnalysisError: If the player page could not be fetched
    """
    logger.info("Analyzing MTGGoldfish profile: %s...", username)

    result = source.analyze_user_profile(username)
    if not result.is_ok:
        raise ProfileAnalysisError("MTGGoldfish", str(result.error))
    profile = result.unwrap()

    return ProfileAnalysis(
        platform="MTGGoldfish",
        username=username,
        total_decks=profile.total_decks,
        analyzed_decks=profile.analyzed_decks,
        top_commanders=profile.top_commanders,
        insights=generate_goldfish_insights(profile),
        recommendations=generate_goldfish_recommendations(profile),
    )
