"""
Profile API endpoints.

Analyzes a player's public decks on Moxfield or MTGGoldfish. Upstream
failures raise ProfileAnalysisError, which the app turns into a 502
ApiResponse.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckinsight.analysis.profile_insights import (
    analyze_goldfish_profile,
    analyze_moxfield_profile,
)
from deckinsight.api.deps import get_goldfish_client, get_moxfield_client
from deckinsight.models.profile import ProfileAnalysis
from deckinsight.scrapers.moxfield import MoxfieldClient
from deckinsight.scrapers.mtggoldfish import MtgGoldfishClient

router = APIRouter(prefix="/profiles", tags=["profiles"])


class RankedResponse(BaseModel):
    name: str
    count: int


class PatternResponse(BaseModel):
    """Aggregated deck-building pattern (Moxfield only)."""

    formats: dict[str, int] = Field(default_factory=dict)
    commanders: dict[str, int] = Field(default_factory=dict)
    colors: dict[str, int] = Field(default_factory=dict)
    favorite_format: str | None = None
    top_color_combos: list[RankedResponse] = Field(default_factory=list)


class ProfileResponse(BaseModel):
    """Response model for a profile analysis."""

    platform: str
    username: str
    total_decks: int
    analyzed_decks: int | None = None
    top_commanders: list[RankedResponse] = Field(default_factory=list)
    insights: list[str]
    recommendations: list[str]
    pattern: PatternResponse | None = None


def _to_response(analysis: ProfileAnalysis) -> ProfileResponse:
    pattern = None
    if analysis.pattern is not None:
        pattern = PatternResponse(
            formats=analysis.pattern.formats,
            commanders=analysis.pattern.commanders,
            colors=analysis.pattern.colors,
            favorite_format=analysis.pattern.favorite_format,
            top_color_combos=[
                RankedResponse(name=e.name, count=e.count) for e in analysis.pattern.top_color_combos
            ],
        )

    return ProfileResponse(
        platform=analysis.platform,
        username=analysis.username,
        total_decks=analysis.total_decks,
        analyzed_decks=analysis.analyzed_decks,
        top_commanders=[RankedResponse(name=e.name, count=e.count) for e in analysis.top_commanders],
        insights=analysis.insights,
        recommendations=analysis.recommendations,
        pattern=pattern,
    )


@router.get("/moxfield/{username}", response_model=ProfileResponse)
def get_moxfield_profile(
    username: str,
    moxfield: Annotated[MoxfieldClient, Depends(get_moxfield_client)],
) -> ProfileResponse:
    """Analyze a Moxfield user's public decks."""
    return _to_response(analyze_moxfield_profile(username, moxfield))


@router.get("/mtggoldfish/{username}", response_model=ProfileResponse)
def get_mtggoldfish_profile(
    username: str,
    goldfish: Annotated[MtgGoldfishClient, Depends(get_goldfish_client)],
) -> ProfileResponse:
    """Analyze an MTGGoldfish player's most recent decks."""
    return _to_response(analyze_goldfish_profile(username, goldfish))
