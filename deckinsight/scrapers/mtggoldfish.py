"""
MTGGoldfish scraper.

Fetches metagame pages, player pages and deck pages, and extracts
structured records from their HTML.

Note: Web scraping is inherently fragile. Page structure may change.
Extraction lives in the pure parse_* functions so it can be tested against
frozen HTML and swapped without touching the analysis code. Network calls
never raise; they return a FetchResult.
"""

import logging
import re
from urllib.parse import quote

import httpx

from deckinsight.analysis.aggregator import build_frequency_map, top_n
from deckinsight.config import settings
from deckinsight.models.card import CardEntry
from deckinsight.models.failure import FetchError, FetchResult
from deckinsight.models.meta import MetaDeckRecord
from deckinsight.models.profile import DeckLink, GoldfishProfile, ScrapedDeck
from deckinsight.scrapers.pacing import RequestPacer

logger = logging.getLogger(__name__)

SOURCE_NAME = "MTGGoldfish"

TOP_COMMANDERS_LIMIT = 5

# Archetype tile on a metagame page
# Groups: (archetype_url, deck_name, meta_share)
# Example: <div class="archetype-tile"> ... <a href="/archetype/...">Name</a>
#          ... <span class="archetype-tile-statistic-value">8.5%</span>
ARCHETYPE_TILE_PATTERN = re.compile(
    r'<div class="archetype-tile">.*?'
    r'<a href="([^"]+)"[^>]*>([^<]+)</a>.*?'
    r'<span class="archetype-tile-statistic-value">([^<]+)</span>',
    re.DOTALL,
)

# Deck link on a player page, e.g. <a href="/deck/5123456">Atraxa Superfriends</a>
# Groups: (deck_id, deck_name)
DECK_LINK_PATTERN = re.compile(r'<a href="/deck/(\d+)"[^>]*>([^<]+)</a>')

COMMANDER_HEADER_PATTERN = re.compile(
    r'<div class="deck-container-header">.*?Commander.*?</div>',
    re.DOTALL | re.IGNORECASE,
)
CARD_NAME_ATTR_PATTERN = re.compile(r'data-card-name="([^"]+)"')

DECK_TABLE_PATTERN = re.compile(
    r'<table class="deck-view-deck-table">.*?</table>',
    re.DOTALL | re.IGNORECASE,
)

# Card row inside a deck table: "4 <a ...>Lightning Bolt</a>"
# Groups: (quantity, card_name)
DECK_ROW_PATTERN = re.compile(r"(\d+)\s+<a[^>]*>([^<]+)</a>")


def parse_metagame_page(html: str, base_url: str = settings.mtggoldfish_url) -> list[MetaDeckRecord]:
    """
    Extract meta deck records from a metagame page.

    Records keep page order (highest share first) and the share exactly
    as displayed.

    Args:
        html: Raw HTML content from a metagame page
        base_url: Prefix for relative archetype links

    Returns:
        List of MetaDeckRecord, empty if no tiles matched
    """
    records: list[MetaDeckRecord] = []

    for match in ARCHETYPE_TILE_PATTERN.finditer(html):
        url_path, name, meta_share = match.groups()
        url = f"{base_url}{url_path}" if url_path.startswith("/") else url_path
        records.append(MetaDeckRecord(name=name.strip(), url=url, meta_share=meta_share.strip()))

    return records


def parse_player_page(html: str) -> list[DeckLink]:
    """Extract deck links from a player page, in page order."""
    return [
        DeckLink(id=deck_id, name=name.strip())
        for deck_id, name in DECK_LINK_PATTERN.findall(html)
    ]


def parse_deck_page(html: str) -> ScrapedDeck:
    """
    Extract the commander and mainboard from a deck page.

    Returns:
        ScrapedDeck; commander is None and mainboard empty when not found
    """
    deck = ScrapedDeck()

    header = COMMANDER_HEADER_PATTERN.search(html)
    if header:
        name_match = CARD_NAME_ATTR_PATTERN.search(header.group(0))
        if name_match:
            deck.commander = name_match.group(1)

    table = DECK_TABLE_PATTERN.search(html)
    if table:
        for quantity, name in DECK_ROW_PATTERN.findall(table.group(0)):
            name = name.strip()
            if int(quantity) >= 1 and name:
                deck.mainboard.append(CardEntry(quantity=int(quantity), name=name))

    return deck


class MtgGoldfishClient:
    """
    HTTP client for MTGGoldfish pages.

    Requests are paced to at most one per `min_interval` seconds.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        base_url: str = settings.mtggoldfish_url,
        pacer: RequestPacer | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
            timeout=settings.request_timeout,
        )
        self._pacer = pacer or RequestPacer(settings.mtggoldfish_min_interval)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "MtgGoldfishClient":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def fetch_html(self, path: str) -> FetchResult[str]:
        """
        Fetch a page by path.

        Returns:
            FetchResult with the HTML, or a FetchError for non-2xx
            responses and transport failures
        """
        url = f"{self.base_url}{path}"
        self._pacer.wait()

        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("MTGGoldfish request failed: %s %s", status, url)
            return FetchResult.fail(
                FetchError(f"MTGGoldfish request failed: {status}", source=url, status=status)
            )
        except httpx.HTTPError as e:
            logger.warning("MTGGoldfish request failed: %s (%s)", url, e)
            return FetchResult.fail(FetchError(f"MTGGoldfish request failed: {e}", source=url))

        return FetchResult.ok(response.text)

    def get_meta_decks(self, format_name: str) -> FetchResult[list[MetaDeckRecord]]:
        """Meta deck records for a format, in page order."""
        result = self.fetch_html(f"/metagame/{quote(format_name)}")
        return result.map(lambda html: parse_metagame_page(html, self.base_url))

    def get_user_decks(self, username: str) -> FetchResult[list[DeckLink]]:
        """Deck links listed on a player page."""
        return self.fetch_html(f"/player/{quote(username)}").map(parse_player_page)

    def get_deck(self, deck_id: str) -> FetchResult[ScrapedDeck]:
        return self.fetch_html(f"/deck/{quote(deck_id)}").map(parse_deck_page)

    def analyze_user_profile(
        self,
        username: str,
        max_decks: int = settings.profile_decks_to_analyze,
    ) -> FetchResult[GoldfishProfile]:
        """
        Build a coarse profile from a player's most recent decks.

        Workflow:
        1. Fetch the player page for the deck list
        2. Fetch up to `max_decks` deck pages; failures are skipped
        3. Rank the commanders found on those pages

        Returns:
            FetchResult with the profile; fails only if the player page fails
        """
        links_result = self.get_user_decks(username)
        if not links_result.is_ok:
            return FetchResult(error=links_result.error)
        links = links_result.unwrap()

        decks: list[ScrapedDeck] = []
        for link in links[:max_decks]:
            deck_result = self.get_deck(link.id)
            if not deck_result.is_ok:
                # Skip decks that fail to download
                logger.warning("Failed to fetch deck %s: %s", link.id, deck_result.error)
                continue
            decks.append(deck_result.unwrap())

        commanders = build_frequency_map(deck.commander for deck in decks if deck.commander)

        return FetchResult.ok(
            GoldfishProfile(
                username=username,
                total_decks=len(links),
                analyzed_decks=len(decks),
                top_commanders=top_n(commanders, TOP_COMMANDERS_LIMIT),
                decks=decks,
            )
        )
