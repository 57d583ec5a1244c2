"""
Metagame API endpoints.

Analyzes the current metagame of a format from MTGGoldfish data.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from deckinsight.analysis.meta_trends import analyze_format, compare_deck_to_meta
from deckinsight.api.deps import get_goldfish_client
from deckinsight.models.failure import FailureDetail
from deckinsight.scrapers.mtggoldfish import MtgGoldfishClient

router = APIRouter(prefix="/meta", tags=["meta"])


class MetaDeckResponse(BaseModel):
    name: str
    url: str = ""
    meta_share: str | float | None = None


class TrendsResponse(BaseModel):
    popular: list[str] = Field(default_factory=list)
    emerging: list[str] = Field(default_factory=list)
    declining: list[str] = Field(default_factory=list)


class ComparisonResponse(BaseModel):
    """How a commander's deck sits relative to the top meta decks."""

    deck: str
    is_meta_deck: bool
    meta_position: int | None = None
    suggestions: list[str] = Field(default_factory=list)


class MetaAnalysisResponse(BaseModel):
    """Response model for a format's metagame analysis."""

    format: str
    timestamp: str
    total_decks: int
    top_decks: list[MetaDeckResponse]
    trends: TrendsResponse
    summary: list[str]
    fetch_failure: FailureDetail | None = Field(
        default=None,
        description="Set when the metagame could not be fetched; the analysis is then empty",
    )
    comparison: ComparisonResponse | None = None


@router.get("/{format_name}", response_model=MetaAnalysisResponse)
def get_meta_analysis(
    format_name: str,
    goldfish: Annotated[MtgGoldfishClient, Depends(get_goldfish_client)],
    commander: Annotated[str | None, Query(description="Compare this commander's deck to the meta")] = None,
    deck_name: str | None = None,
) -> MetaAnalysisResponse:
    """
    Analyze the metagame for a format.

    A failed fetch still returns 200 with an empty analysis; check
    `fetch_failure` to tell it apart from a format with no decks.
    """
    analysis = analyze_format(format_name, goldfish)

    response = MetaAnalysisResponse(
        format=analysis.format,
        timestamp=analysis.timestamp,
        total_decks=analysis.total_decks,
        top_decks=[
            MetaDeckResponse(name=r.name, url=r.url, meta_share=r.meta_share)
            for r in analysis.top_decks
        ],
        trends=TrendsResponse(
            popular=analysis.trends.popular,
            emerging=analysis.trends.emerging,
            declining=analysis.trends.declining,
        ),
        summary=analysis.summary,
    )

    if analysis.fetch_error is not None:
        response.fetch_failure = analysis.fetch_error.to_response().failure

    if commander:
        comparison = compare_deck_to_meta(analysis, commander, deck_name)
        response.comparison = ComparisonResponse(
            deck=comparison.deck,
            is_meta_deck=comparison.is_meta_deck,
            meta_position=comparison.meta_position,
            suggestions=comparison.suggestions,
        )

    return response
