from dataclasses import dataclass, field

from deckinsight.models.failure import FetchError


@dataclass(frozen=True)
class MetaDeckRecord:
    """
    A deck archetype as listed on a metagame page.

    Attributes:
        name: Archetype name (e.g., "Mono Red Aggro")
        url: Where the archetype page lives
        meta_share: Share of the field as displayed ("8.5%", "8.5") or a number.
            Kept raw; see analysis.meta_trends.normalize_meta_share.
    """

    name: str
    url: str = ""
    meta_share: str | float | None = None


@dataclass
class Trends:
    """
    Popularity tiers for a metagame snapshot.

    `declining` has no rule that populates it and is always empty.
    """

    popular: list[str] = field(default_factory=list)
    emerging: list[str] = field(default_factory=list)
    declining: list[str] = field(default_factory=list)


@dataclass
class MetaAnalysis:
    """
    Analysis of one format's metagame.

    A failed fetch and an empty successful fetch produce the same summary;
    `fetch_error` is the only way to tell them apart.
    """

    format: str
    timestamp: str
    total_decks: int
    top_decks: list[MetaDeckRecord]
    trends: Trends
    summary: list[str]
    fetch_error: FetchError | None = None

    @property
    def fetch_failed(self) -> bool:
        return self.fetch_error is not None


@dataclass
class MetaComparison:
    """How a user's deck sits relative to the current meta."""

    deck: str
    format: str
    is_meta_deck: bool = False
    meta_position: int | None = None
    suggestions: list[str] = field(default_factory=list)
