from dataclasses import dataclass

# key -> count, every count >= 1. Insertion order is the tie-break order.
FrequencyMap = dict[str, int]


@dataclass(frozen=True, slots=True)
class RankedEntry:
    """A key from a frequency map with its count."""

    name: str
    count: int
