"""
Metagame trend analysis.

Classifies scraped meta deck records into popularity tiers and writes a
short narrative summary. Records are expected in the order the metagame
page lists them (highest share first); classification relies on it.

Meta shares arrive as display strings ("8.5%", "8.5", "") and are
normalized with normalize_meta_share before any numeric comparison.
"""

import logging
import math
from collections.abc import Iterator, Sequence
from datetime import UTC, datetime
from typing import Protocol

from deckinsight.analysis.aggregator import build_frequency_map, top_n
from deckinsight.analysis.legality import is_basic_land
from deckinsight.models.card import CardEntry
from deckinsight.models.failure import FetchResult
from deckinsight.models.meta import MetaAnalysis, MetaComparison, MetaDeckRecord, Trends
from deckinsight.models.ranking import RankedEntry

logger = logging.getLogger(__name__)

# The first N records are always popular
POPULAR_COUNT = 3

# Shares strictly inside (0, 5) percent mark an emerging deck
EMERGING_SHARE_CEILING = 5.0
MAX_EMERGING = 3

# How many records an analysis keeps for display
TOP_DECKS_LIMIT = 10


class MetaDeckSource(Protocol):
    """Anything that can supply meta deck records for a format."""

    def get_meta_decks(self, format_name: str) -> FetchResult[list[MetaDeckRecord]]: ...


def normalize_meta_share(value: str | float | int | None) -> float:
    """
    Convert a displayed meta share to a float percentage.

    Accepts "5.2%", " 5.2 % ", "5.2" and numbers. Missing, non-numeric,
    negative and non-finite values become 0.0.
    """
    if value is None:
        return 0.0

    raw: str | float | int = value
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("%"):
            raw = raw[:-1].strip()

    try:
        share = float(raw)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(share) or share < 0:
        return 0.0
    return share


def identify_trends(records: Sequence[MetaDeckRecord]) -> Trends:
    """
    Sort meta decks into popularity tiers.

    - popular: the first three records, regardless of share (only when
      at least three records exist)
    - emerging: up to three records with a share strictly between 0 and 5%
    - declining: no rule populates it; always empty
    """
    trends = Trends()

    if len(records) >= POPULAR_COUNT:
        trends.popular = [record.name for record in records[:POPULAR_COUNT]]

    low_share = [
        record.name
        for record in records
        if 0 < normalize_meta_share(record.meta_share) < EMERGING_SHARE_CEILING
    ]
    trends.emerging = low_share[:MAX_EMERGING]

    return trends


def generate_meta_summary(records: Sequence[MetaDeckRecord]) -> list[str]:
    """Human-readable summary lines for a metagame snapshot."""
    if not records:
        return [
            "Unable to fetch current meta data",
            "Meta analysis requires web scraping which may be limited",
        ]

    top_deck = records[0]
    # Raw display value, as the source page showed it
    share = top_deck.meta_share if top_deck.meta_share is not None else "unknown share"
    summary = [
        f"Analyzed {len(records)} meta decks",
        f"Most played: {top_deck.name} ({share} of meta)",
    ]
    if len(records) >= POPULAR_COUNT:
        summary.append("Top 3 strategies dominate the format")

    return summary


def build_meta_analysis(format_name: str, records: Sequence[MetaDeckRecord]) -> MetaAnalysis:
    """Analyze an already-fetched list of meta deck records."""
    return MetaAnalysis(
        format=format_name,
        timestamp=datetime.now(UTC).isoformat(),
        total_decks=len(records),
        top_decks=list(records[:TOP_DECKS_LIMIT]),
        trends=identify_trends(records),
        summary=generate_meta_summary(records),
    )


def analyze_format(format_name: str, source: MetaDeckSource) -> MetaAnalysis:
    """
    Fetch and analyze the metagame for a format.

    A failed fetch yields the same degraded analysis as an empty one;
    the failure is kept on `fetch_error` so callers can still tell them apart.

    Args:
        format_name: Format to analyze (e.g., "commander", "modern")
        source: Collaborator that fetches meta deck records

    Returns:
        MetaAnalysis for the format
    """
    logger.info("Analyzing %s meta...", format_name)

    result = source.get_meta_decks(format_name)
    if not result.is_ok:
        logger.warning("Meta fetch for %s failed: %s", format_name, result.error)
        analysis = build_meta_analysis(format_name, [])
        analysis.fetch_error = result.error
        return analysis

    records = result.value or []
    logger.info("Analyzed %d meta decks for %s", len(records), format_name)
    return build_meta_analysis(format_name, records)


def compare_deck_to_meta(
    analysis: MetaAnalysis,
    commander: str | None,
    deck_name: str | None = None,
) -> MetaComparison:
    """
    Compare a user's deck to the top meta decks.

    A deck matches the meta when a top deck's name contains its commander
    (case-insensitive). Without a commander nothing matches.
    """
    comparison = MetaComparison(deck=deck_name or "User Deck", format=analysis.format)

    match_position: int | None = None
    if commander:
        needle = commander.lower()
        for position, record in enumerate(analysis.top_decks, start=1):
            if needle in record.name.lower():
                match_position = position
                break

    if match_position is not None:
        comparison.is_meta_deck = True
        comparison.meta_position = match_position
        comparison.suggestions = [
            "This is a popular meta deck!",
            "Consider tech cards to gain edges in mirror matches",
        ]
    else:
        comparison.suggestions = [
            "This is an off-meta deck",
            "Consider meta-specific hate cards or combo protection",
        ]

    return comparison


def identify_format_staples(
    decklists: Sequence[Sequence[CardEntry]],
    limit: int | None = None,
) -> list[RankedEntry]:
    """
    Cards that appear in more than one decklist.

    Each card counts once per deck regardless of quantity. Basic lands
    are excluded. Ranked by number of decks, ties in first-seen order.
    """

    def deck_observations() -> Iterator[str]:
        for cards in decklists:
            seen: set[str] = set()
            for card in cards:
                if is_basic_land(card.name) or card.name in seen:
                    continue
                seen.add(card.name)
                yield card.name

    frequency = build_frequency_map(deck_observations())
    staples = [entry for entry in top_n(frequency) if entry.count > 1]
    return staples[:limit] if limit is not None else staples
