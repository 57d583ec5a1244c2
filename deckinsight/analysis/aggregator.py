"""
Frequency aggregation and ranking.

Every ranking in DeckInsight (meta staples, profile patterns, build history)
goes through these functions so ties always break the same way: by the order
in which a key was first observed. Python's sort is stable and dicts keep
insertion order, so sorting a frequency map by count alone is enough.
"""

from collections.abc import Iterable

from deckinsight.models.ranking import FrequencyMap, RankedEntry

Observation = str | tuple[str, int]


def build_frequency_map(observations: Iterable[Observation]) -> FrequencyMap:
    """
    Count observations into a frequency map.

    Args:
        observations: Keys (weight 1) or (key, weight) pairs

    Returns:
        FrequencyMap with summed weights, keyed in first-seen order.
        Empty keys and weights below 1 are ignored.
    """
    frequency: FrequencyMap = {}

    for observation in observations:
        if isinstance(observation, tuple):
            key, weight = observation
        else:
            key, weight = observation, 1

        if not key or weight < 1:
            continue

        frequency[key] = frequency.get(key, 0) + weight

    return frequency


def top_n(frequency: FrequencyMap, n: int | None = None) -> list[RankedEntry]:
    """
    Rank a frequency map by count, highest first.

    Args:
        frequency: Map to rank
        n: Maximum entries to return; None returns all

    Returns:
        RankedEntry list, non-increasing by count, ties in first-insertion order
    """
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    if n is not None:
        ranked = ranked[: max(n, 0)]
    return [RankedEntry(name=name, count=count) for name, count in ranked]


def most_common(frequency: FrequencyMap) -> RankedEntry | None:
    """Top entry of a frequency map, or None if it is empty."""
    ranked = top_n(frequency, 1)
    return ranked[0] if ranked else None
