from pathlib import Path

import httpx
import pytest
import respx

from deckinsight.models.card import CardEntry
from deckinsight.models.failure import FailureKind
from deckinsight.scrapers.mtggoldfish import (
    MtgGoldfishClient,
    parse_deck_page,
    parse_metagame_page,
    parse_player_page,
)
from deckinsight.scrapers.pacing import RequestPacer

BASE_URL = "https://www.mtggoldfish.com"


def _read_fixture(name: str) -> str:
    return (Path(__file__).parent / "fixtures" / name).read_text()


@pytest.fixture
def metagame_html() -> str:
    return _read_fixture("mtggoldfish_metagame.html")


@pytest.fixture
def player_html() -> str:
    return _read_fixture("mtggoldfish_player.html")


@pytest.fixture
def deck_html() -> str:
    return _read_fixture("mtggoldfish_deck.html")


@pytest.fixture
def client():
    """Client with pacing disabled so tests never sleep."""
    with MtgGoldfishClient(base_url=BASE_URL, pacer=RequestPacer(0)) as goldfish:
        yield goldfish


class TestParseMetagamePage:
    def test_parses_records(self, metagame_html: str) -> None:
        """Extracts one record per archetype tile."""
        records = parse_metagame_page(metagame_html, BASE_URL)

        assert len(records) == 4

    def test_keeps_page_order(self, metagame_html: str) -> None:
        records = parse_metagame_page(metagame_html, BASE_URL)

        assert [r.name for r in records] == [
            "Atraxa Superfriends",
            "Krenko Goblins",
            "Yuriko Ninjas",
            "Lathril Elves",
        ]

    def test_keeps_share_as_displayed(self, metagame_html: str) -> None:
        """Shares stay raw strings, surrounding whitespace trimmed."""
        records = parse_metagame_page(metagame_html, BASE_URL)

        assert [r.meta_share for r in records] == ["8.5%", "6.2%", "4.1%", "2.0%"]

    def test_builds_urls(self, metagame_html: str) -> None:
        """Relative links get the base URL; absolute links are kept."""
        records = parse_metagame_page(metagame_html, BASE_URL)

        assert records[0].url == f"{BASE_URL}/archetype/commander-atraxa-praetors-voice"
        assert records[3].url == "https://www.mtggoldfish.com/archetype/commander-lathril"

    def test_empty_page(self) -> None:
        assert parse_metagame_page("<html><body></body></html>", BASE_URL) == []


class TestParsePlayerPage:
    def test_extracts_deck_links(self, player_html: str) -> None:
        links = parse_player_page(player_html)

        assert [(link.id, link.name) for link in links] == [
            ("5123456", "Atraxa Superfriends"),
            ("5123457", "Krenko Tokens"),
            ("5123458", "Yuriko Ninjas"),
        ]

    def test_ignores_non_deck_links(self) -> None:
        assert parse_player_page('<a href="/deck/custom">Build</a>') == []


class TestParseDeckPage:
    def test_extracts_commander(self, deck_html: str) -> None:
        assert parse_deck_page(deck_html).commander == "Krenko, Mob Boss"

    def test_extracts_mainboard(self, deck_html: str) -> None:
        deck = parse_deck_page(deck_html)

        assert deck.mainboard == [
            CardEntry(quantity=1, name="Krenko, Mob Boss"),
            CardEntry(quantity=1, name="Goblin Chieftain"),
            CardEntry(quantity=1, name="Sol Ring"),
            CardEntry(quantity=30, name="Mountain"),
        ]

    def test_missing_sections(self) -> None:
        deck = parse_deck_page("<html></html>")

        assert deck.commander is None
        assert deck.mainboard == []


class TestMtgGoldfishClient:
    @respx.mock
    def test_get_meta_decks(self, client: MtgGoldfishClient, metagame_html: str) -> None:
        respx.get(f"{BASE_URL}/metagame/commander").mock(
            return_value=httpx.Response(200, text=metagame_html)
        )

        result = client.get_meta_decks("commander")

        assert result.is_ok
        assert len(result.unwrap()) == 4

    @respx.mock
    def test_empty_page_is_a_successful_fetch(self, client: MtgGoldfishClient) -> None:
        """No tiles is an empty success, not a failure."""
        respx.get(f"{BASE_URL}/metagame/commander").mock(
            return_value=httpx.Response(200, text="<html></html>")
        )

        result = client.get_meta_decks("commander")

        assert result.is_ok
        assert result.unwrap() == []

    @respx.mock
    def test_http_error_is_returned_not_raised(self, client: MtgGoldfishClient) -> None:
        respx.get(f"{BASE_URL}/metagame/commander").mock(return_value=httpx.Response(503))

        result = client.get_meta_decks("commander")

        assert not result.is_ok
        assert result.error.status == 503
        assert result.error.kind == FailureKind.EXTERNAL_API_ERROR
        assert "503" in result.error.message

    @respx.mock
    def test_transport_error(self, client: MtgGoldfishClient) -> None:
        respx.get(f"{BASE_URL}/player/brewer").mock(side_effect=httpx.ConnectError("refused"))

        result = client.get_user_decks("brewer")

        assert not result.is_ok
        assert result.error.status is None

    @respx.mock
    def test_analyze_user_profile(
        self, client: MtgGoldfishClient, player_html: str, deck_html: str
    ) -> None:
        respx.get(f"{BASE_URL}/player/brewer").mock(
            return_value=httpx.Response(200, text=player_html)
        )
        respx.get(f"{BASE_URL}/deck/5123456").mock(return_value=httpx.Response(200, text=deck_html))
        respx.get(f"{BASE_URL}/deck/5123457").mock(return_value=httpx.Response(200, text=deck_html))

        result = client.analyze_user_profile("brewer", max_decks=2)

        profile = result.unwrap()
        assert profile.total_decks == 3
        assert profile.analyzed_decks == 2
        assert [(c.name, c.count) for c in profile.top_commanders] == [("Krenko, Mob Boss", 2)]

    @respx.mock
    def test_analyze_user_profile_skips_failed_decks(
        self, client: MtgGoldfishClient, player_html: str, deck_html: str
    ) -> None:
        respx.get(f"{BASE_URL}/player/brewer").mock(
            return_value=httpx.Response(200, text=player_html)
        )
        respx.get(f"{BASE_URL}/deck/5123456").mock(return_value=httpx.Response(500))
        respx.get(f"{BASE_URL}/deck/5123457").mock(return_value=httpx.Response(200, text=deck_html))
        respx.get(f"{BASE_URL}/deck/5123458").mock(return_value=httpx.Response(404))

        profile = client.analyze_user_profile("brewer").unwrap()

        assert profile.analyzed_decks == 1
        assert profile.total_decks == 3

    @respx.mock
    def test_analyze_user_profile_fails_when_player_page_fails(
        self, client: MtgGoldfishClient
    ) -> None:
        respx.get(f"{BASE_URL}/player/ghost").mock(return_value=httpx.Response(404))

        result = client.analyze_user_profile("ghost")

        assert not result.is_ok
        assert result.error.status == 404
