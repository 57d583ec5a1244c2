"""
Moxfield API client.

Moxfield has no official public API; the v2 endpoints used here are the
ones its web app calls. Responses are JSON. Like the MTGGoldfish scraper,
calls never raise for network or payload problems; they return a
FetchResult.
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from deckinsight.analysis.profile_insights import build_user_pattern
from deckinsight.config import settings
from deckinsight.models.card import CardEntry
from deckinsight.models.failure import FailureKind, FetchError, FetchResult
from deckinsight.models.profile import DeckCardList, MoxfieldProfile
from deckinsight.scrapers.pacing import RequestPacer

logger = logging.getLogger(__name__)

SOURCE_NAME = "Moxfield"

DEFAULT_PAGE_SIZE = 12


def _board_entries(board: Any) -> list[CardEntry]:
    """
    Card entries of one board.

    Boards are objects keyed by card name (or id) whose values hold
    `quantity` and a nested `card`. Entries without a card are skipped.
    """
    if not isinstance(board, Mapping):
        return []

    entries: list[CardEntry] = []
    for item in board.values():
        if not isinstance(item, Mapping):
            continue
        card = item.get("card")
        name = card.get("name") if isinstance(card, Mapping) else None
        if not name or not str(name).strip():
            continue
        quantity = item.get("quantity") or 1
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            quantity = 1
        entries.append(CardEntry(quantity=max(quantity, 1), name=str(name).strip()))
    return entries


def parse_deck_card_list(payload: Mapping[str, Any]) -> DeckCardList:
    """Split a deck payload into commanders and mainboard entries."""
    return DeckCardList(
        commanders=_board_entries(payload.get("commanders")),
        mainboard=_board_entries(payload.get("mainboard")),
    )


class MoxfieldClient:
    """HTTP client for the Moxfield v2 API."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        base_url: str = settings.moxfield_api_url,
        pacer: RequestPacer | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers={"Accept": "application/json", "User-Agent": settings.user_agent},
            timeout=settings.request_timeout,
        )
        self._pacer = pacer or RequestPacer(settings.moxfield_min_interval)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "MoxfieldClient":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def request(self, endpoint: str, params: Mapping[str, Any] | None = None) -> FetchResult[Any]:
        """
        GET an endpoint and decode its JSON body.

        Parameters whose value is None are not sent.

        Returns:
            FetchResult with the decoded JSON, or a FetchError for non-2xx
            responses, transport failures and bodies that are not JSON
        """
        url = f"{self.base_url}{endpoint}"
        query = {key: value for key, value in (params or {}).items() if value is not None}
        self._pacer.wait()

        try:
            response = self._client.get(url, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Moxfield API error: %s %s", status, url)
            return FetchResult.fail(
                FetchError(
                    f"Moxfield API error: {status} {e.response.reason_phrase}",
                    source=url,
                    status=status,
                )
            )
        except httpx.HTTPError as e:
            logger.warning("Moxfield API request failed: %s (%s)", url, e)
            return FetchResult.fail(FetchError(f"Moxfield API request failed: {e}", source=url))

        try:
            return FetchResult.ok(response.json())
        except ValueError:
            logger.warning("Moxfield returned a non-JSON body for %s", url)
            return FetchResult.fail(
                FetchError(
                    "Moxfield returned an unreadable response",
                    source=url,
                    status=response.status_code,
                    kind=FailureKind.UNPARSABLE_RESPONSE,
                )
            )

    def get_user_decks(
        self,
        username: str,
        page_number: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> FetchResult[Any]:
        """A page of the user's public decks, most recently updated first."""
        return self.request(
            "/decks/search",
            {
                "pageNumber": page_number,
                "pageSize": page_size,
                "authors": username,
                "sortType": "updated",
                "sortDirection": "Descending",
            },
        )

    def get_deck(self, deck_id: str) -> FetchResult[Any]:
        return self.request(f"/decks/all/{quote(deck_id)}")

    def get_user_profile(
        self,
        username: str,
        page_size: int = settings.moxfield_page_size,
    ) -> FetchResult[MoxfieldProfile]:
        """
        Fetch a user's decks and mine their pattern.

        Only the first page is analyzed; `total_decks` still reports the
        user's full public deck count.
        """
        result = self.get_user_decks(username, 1, page_size)
        if not result.is_ok:
            return FetchResult(error=result.error)

        payload = result.unwrap()
        if not isinstance(payload, Mapping):
            return FetchResult.fail(
                FetchError(
                    "Moxfield returned an unexpected deck search payload",
                    source=f"{self.base_url}/decks/search",
                    kind=FailureKind.UNPARSABLE_RESPONSE,
                )
            )

        decks = [deck for deck in payload.get("data") or [] if isinstance(deck, Mapping)]
        logger.info("Fetched %d Moxfield decks for %s", len(decks), username)

        return FetchResult.ok(
            MoxfieldProfile(
                username=username,
                total_decks=int(payload.get("totalResults") or 0),
                decks=[dict(deck) for deck in decks],
                pattern=build_user_pattern(decks),
            )
        )

    def get_deck_card_list(self, deck_id: str) -> FetchResult[DeckCardList]:
        result = self.get_deck(deck_id)
        if not result.is_ok:
            return FetchResult(error=result.error)
        payload = result.unwrap()
        if not isinstance(payload, Mapping):
            return FetchResult.ok(DeckCardList())
        return FetchResult.ok(parse_deck_card_list(payload))
