import pytest

from deckinsight.analysis.recommendations import RecommendationEngine
from deckinsight.models.failure import FetchError, FetchResult
from deckinsight.models.meta import MetaDeckRecord
from deckinsight.models.profile import GoldfishProfile, MoxfieldProfile
from deckinsight.models.ranking import RankedEntry


class StubMetaSource:
    """MetaDeckSource that returns a canned result and records calls."""

    def __init__(self, result: FetchResult[list[MetaDeckRecord]]) -> None:
        self.result = result
        self.calls: list[str] = []

    def get_meta_decks(self, format_name: str) -> FetchResult[list[MetaDeckRecord]]:
        self.calls.append(format_name)
        return self.result


class StubMoxfieldSource:
    def __init__(self, result: FetchResult[MoxfieldProfile]) -> None:
        self.result = result

    def get_user_profile(self, username: str) -> FetchResult[MoxfieldProfile]:
        return self.result


class StubGoldfishSource:
    def __init__(self, result: FetchResult[GoldfishProfile]) -> None:
        self.result = result

    def analyze_user_profile(self, username: str) -> FetchResult[GoldfishProfile]:
        return self.result


@pytest.fixture
def sample_deck_list() -> str:
    """Noisy pasted decklist with headings, labels and a duplicate."""
    return """# Commander
Commander: Atraxa, Praetors' Voice

**Creatures**
1x Birds of Paradise
1 Sol Ring
1 sol ring
Arcane Signet

Lands (3)
10 Forest
5 Plains
1 Command Tower"""


@pytest.fixture
def meta_records() -> list[MetaDeckRecord]:
    """Five meta decks in page order, highest share first."""
    return [
        MetaDeckRecord(name="Atraxa Superfriends", url="https://example.com/1", meta_share="12.5%"),
        MetaDeckRecord(name="Krenko Goblins", url="https://example.com/2", meta_share="8.0%"),
        MetaDeckRecord(name="Yuriko Ninjas", url="https://example.com/3", meta_share="6.1%"),
        MetaDeckRecord(name="Lathril Elves", url="https://example.com/4", meta_share="4.2%"),
        MetaDeckRecord(name="Chulane Value", url="https://example.com/5", meta_share="0.0%"),
    ]


@pytest.fixture
def meta_source(meta_records: list[MetaDeckRecord]) -> StubMetaSource:
    return StubMetaSource(FetchResult.ok(meta_records))


@pytest.fixture
def failing_meta_source() -> StubMetaSource:
    return StubMetaSource(
        FetchResult.fail(
            FetchError(
                "MTGGoldfish request failed: 503",
                source="https://www.mtggoldfish.com/metagame/commander",
                status=503,
            )
        )
    )


@pytest.fixture
def moxfield_decks() -> list[dict]:
    """Deck search payload items as returned by Moxfield."""
    return [
        {
            "name": "Atraxa Counters",
            "format": "commander",
            "commanders": [{"card": {"name": "Atraxa, Praetors' Voice"}}],
            "colorIdentity": ["W", "U", "B", "G"],
        },
        {
            "name": "Atraxa Superfriends",
            "format": "commander",
            "commanders": [{"card": {"name": "Atraxa, Praetors' Voice"}}],
            "colorIdentity": ["G", "U", "B", "W"],
        },
        {
            "name": "Krenko Tokens",
            "format": "commander",
            "commanders": [{"card": {"name": "Krenko, Mob Boss"}}],
            "colorIdentity": ["R"],
        },
        {
            "name": "Burn",
            "format": "modern",
            "commanders": [],
            "colorIdentity": ["R"],
        },
    ]


@pytest.fixture
def goldfish_profile() -> GoldfishProfile:
    return GoldfishProfile(
        username="brewer",
        total_decks=12,
        analyzed_decks=2,
        top_commanders=[RankedEntry(name="Krenko, Mob Boss", count=2)],
    )


@pytest.fixture
def engine() -> RecommendationEngine:
    """Engine with a fixed clock so timestamps are predictable."""
    return RecommendationEngine(clock=lambda: "2024-01-01T00:00:00+00:00")


@pytest.fixture
def moxfield_source_factory():
    """Build a MoxfieldProfileSource returning the given result."""
    return StubMoxfieldSource


@pytest.fixture
def goldfish_source_factory():
    """Build a GoldfishProfileSource returning the given result."""
    return StubGoldfishSource
