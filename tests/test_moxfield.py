"""Tests for the Moxfield API client."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from deckinsight.models.card import CardEntry
from deckinsight.models.failure import FailureKind
from deckinsight.scrapers.moxfield import MoxfieldClient, parse_deck_card_list
from deckinsight.scrapers.pacing import RequestPacer

BASE_URL = "https://api.moxfield.com/v2"


@pytest.fixture
def deck_payload() -> dict:
    fixture_path = Path(__file__).parent / "fixtures" / "moxfield_deck.json"
    return json.loads(fixture_path.read_text())


@pytest.fixture
def client():
    with MoxfieldClient(base_url=BASE_URL, pacer=RequestPacer(0)) as moxfield:
        yield moxfield


class TestParseDeckCardList:
    def test_commanders(self, deck_payload: dict) -> None:
        card_list = parse_deck_card_list(deck_payload)

        assert card_list.commanders == [CardEntry(quantity=1, name="Atraxa, Praetors' Voice")]

    def test_mainboard(self, deck_payload: dict) -> None:
        """Missing quantity defaults to 1; entries without a card are skipped."""
        card_list = parse_deck_card_list(deck_payload)

        assert card_list.mainboard == [
            CardEntry(quantity=1, name="Sol Ring"),
            CardEntry(quantity=10, name="Forest"),
            CardEntry(quantity=1, name="Doubling Season"),
        ]

    def test_missing_boards(self) -> None:
        card_list = parse_deck_card_list({"name": "Empty"})

        assert card_list.commanders == []
        assert card_list.mainboard == []


class TestMoxfieldClient:
    @respx.mock
    def test_get_user_decks_sends_search_params(self, client: MoxfieldClient) -> None:
        route = respx.get(f"{BASE_URL}/decks/search").mock(
            return_value=httpx.Response(200, json={"data": [], "totalResults": 0})
        )

        result = client.get_user_decks("brewer")

        assert result.is_ok
        params = route.calls.last.request.url.params
        assert params["authors"] == "brewer"
        assert params["pageNumber"] == "1"
        assert params["pageSize"] == "12"
        assert params["sortType"] == "updated"
        assert params["sortDirection"] == "Descending"

    @respx.mock
    def test_request_drops_none_params(self, client: MoxfieldClient) -> None:
        route = respx.get(f"{BASE_URL}/decks/search").mock(
            return_value=httpx.Response(200, json={})
        )

        client.request("/decks/search", {"authors": "brewer", "board": None})

        params = route.calls.last.request.url.params
        assert "board" not in params
        assert params["authors"] == "brewer"

    @respx.mock
    def test_get_user_profile(self, client: MoxfieldClient, moxfield_decks: list[dict]) -> None:
        respx.get(f"{BASE_URL}/decks/search").mock(
            return_value=httpx.Response(200, json={"data": moxfield_decks, "totalResults": 42})
        )

        profile = client.get_user_profile("brewer").unwrap()

        assert profile.username == "brewer"
        assert profile.total_decks == 42
        assert len(profile.decks) == 4
        assert profile.pattern.favorite_format == "commander"

    @respx.mock
    def test_get_user_profile_without_decks(self, client: MoxfieldClient) -> None:
        respx.get(f"{BASE_URL}/decks/search").mock(return_value=httpx.Response(200, json={}))

        profile = client.get_user_profile("new").unwrap()

        assert profile.total_decks == 0
        assert profile.decks == []

    @respx.mock
    def test_http_error(self, client: MoxfieldClient) -> None:
        respx.get(f"{BASE_URL}/decks/search").mock(return_value=httpx.Response(404))

        result = client.get_user_profile("ghost")

        assert not result.is_ok
        assert result.error.status == 404
        assert result.error.message == "Moxfield API error: 404 Not Found"

    @respx.mock
    def test_non_json_body(self, client: MoxfieldClient) -> None:
        respx.get(f"{BASE_URL}/decks/all/abc123").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        result = client.get_deck("abc123")

        assert not result.is_ok
        assert result.error.kind == FailureKind.UNPARSABLE_RESPONSE

    @respx.mock
    def test_get_deck_card_list(self, client: MoxfieldClient, deck_payload: dict) -> None:
        respx.get(f"{BASE_URL}/decks/all/abc123").mock(
            return_value=httpx.Response(200, json=deck_payload)
        )

        card_list = client.get_deck_card_list("abc123").unwrap()

        assert len(card_list.mainboard) == 3
