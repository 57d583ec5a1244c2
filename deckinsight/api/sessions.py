"""
Session API endpoints.

Each session id owns a build history, a knowledge base of deck techs and
the recommendations derived from them. Sessions are created on first use.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from deckinsight.api.deps import (
    get_goldfish_client,
    get_moxfield_client,
    get_session_registry,
)
from deckinsight.mcp.tools import ToolContext, execute_tool
from deckinsight.models.history import HistoryEntry
from deckinsight.models.knowledge import KnowledgeEntry
from deckinsight.scrapers.moxfield import MoxfieldClient
from deckinsight.scrapers.mtggoldfish import MtgGoldfishClient
from deckinsight.services.sessions import SessionRegistry

router = APIRouter(prefix="/sessions", tags=["sessions"])


class HistoryDeckRequest(BaseModel):
    """A deck the user built."""

    name: str | None = None
    commander: str | None = None
    strategy: str | None = Field(default=None, examples=["tokens"])
    colors: list[str] = Field(default_factory=list, examples=[["W", "G"]])
    cards: list[str] = Field(default_factory=list)


class HistoryEntryResponse(BaseModel):
    timestamp: str
    name: str | None = None
    commander: str | None = None
    strategy: str | None = None
    colors: list[str] = Field(default_factory=list)
    cards: list[str] = Field(default_factory=list)


class HistoryResponse(BaseModel):
    session_id: str
    entries: list[HistoryEntryResponse]
    count: int


class PayloadRequest(BaseModel):
    """A JSON snapshot produced by one of the export endpoints."""

    payload: str = Field(..., description="JSON array as returned by export")


class ExportResponse(BaseModel):
    session_id: str
    payload: str


class ImportResponse(BaseModel):
    session_id: str
    imported: int


class StapleResponse(BaseModel):
    name: str
    appearances: int


class GapResponse(BaseModel):
    type: str
    description: str
    suggestion: str


class AnalysisResponse(BaseModel):
    """Frequency summary of a session's build history."""

    total_decks: int
    commanders: dict[str, int] = Field(default_factory=dict)
    strategies: dict[str, int] = Field(default_factory=dict)
    colors: dict[str, int] = Field(default_factory=dict)
    most_played_commander: str | None = None
    favorite_strategy: str | None = None
    favorite_colors: str | None = None
    staples: list[StapleResponse] = Field(default_factory=list)
    gaps: list[GapResponse] = Field(default_factory=list)


class NextArchetypeResponse(BaseModel):
    archetype: str
    reason: str


class RecommendationsResponse(BaseModel):
    """Personalized recommendations grouped by intent."""

    build_on_strengths: list[str] = Field(default_factory=list)
    explore_new: list[str] = Field(default_factory=list)
    upgrades: list[str] = Field(default_factory=list)
    budget_options: list[str] = Field(default_factory=list)
    next_archetype: NextArchetypeResponse


class BudgetRequest(BaseModel):
    cards: list[str] = Field(..., min_length=1)


class BudgetPlaceholderResponse(BaseModel):
    original: str
    needs_pricing_data: bool


class BudgetResponse(BaseModel):
    note: str
    suggestion: str
    placeholders: list[BudgetPlaceholderResponse]


class KnowledgeRequest(BaseModel):
    """A deck tech learned from a video or article."""

    title: str = Field(..., min_length=1)
    author: str = ""
    url: str = ""
    commander: str | None = None
    strategy: str | None = None
    cards: list[str] = Field(default_factory=list)


class KnowledgeSummaryResponse(BaseModel):
    video: str
    creator: str
    commander: str | None = None
    strategy: str | None = None
    deck_available: bool = False
    card_count: int = 0


class KnowledgeListResponse(BaseModel):
    session_id: str
    entries: list[KnowledgeRequest]
    count: int


class ToolRequest(BaseModel):
    arguments: dict[str, Any] = Field(default_factory=dict)


Registry = Annotated[SessionRegistry, Depends(get_session_registry)]


def _entry_response(entry: HistoryEntry) -> HistoryEntryResponse:
    return HistoryEntryResponse(
        timestamp=entry.timestamp,
        name=entry.name,
        commander=entry.commander,
        strategy=entry.strategy,
        colors=list(entry.colors),
        cards=list(entry.cards),
    )


def _knowledge_response(entry: KnowledgeEntry) -> KnowledgeRequest:
    return KnowledgeRequest(
        title=entry.title,
        author=entry.author,
        url=entry.url,
        commander=entry.commander,
        strategy=entry.strategy,
        cards=list(entry.cards),
    )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def drop_session(session_id: str, registry: Registry) -> Response:
    """Forget a session and everything recorded in it."""
    registry.drop(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/history", response_model=HistoryEntryResponse, status_code=201)
async def add_history(
    session_id: str,
    request: HistoryDeckRequest,
    registry: Registry,
) -> HistoryEntryResponse:
    """Record a deck the user built."""
    engine = registry.get(session_id).engine
    entry = engine.add_to_history(request.model_dump())
    return _entry_response(entry)


@router.get("/{session_id}/history", response_model=HistoryResponse)
async def get_history(session_id: str, registry: Registry) -> HistoryResponse:
    history = registry.get(session_id).engine.history
    return HistoryResponse(
        session_id=session_id,
        entries=[_entry_response(entry) for entry in history],
        count=len(history),
    )


@router.delete("/{session_id}/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(session_id: str, registry: Registry) -> Response:
    registry.get(session_id).engine.clear_history()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{session_id}/history/export", response_model=ExportResponse)
async def export_history(session_id: str, registry: Registry) -> ExportResponse:
    return ExportResponse(
        session_id=session_id,
        payload=registry.get(session_id).engine.export_history(),
    )


@router.post("/{session_id}/history/import", response_model=ImportResponse)
async def import_history(
    session_id: str,
    request: PayloadRequest,
    registry: Registry,
) -> ImportResponse:
    """
    Replace the session's history with an exported snapshot.

    A malformed payload is rejected with 400 and the existing history
    is left untouched.
    """
    engine = registry.get(session_id).engine
    engine.import_history(request.payload)
    return ImportResponse(session_id=session_id, imported=len(engine.history))


@router.get("/{session_id}/analysis", response_model=AnalysisResponse)
async def get_analysis(session_id: str, registry: Registry) -> AnalysisResponse:
    """Frequency summary, recurring staples and unexplored areas."""
    engine = registry.get(session_id).engine
    analysis = engine.analyze_history()

    return AnalysisResponse(
        total_decks=analysis.total_decks,
        commanders=analysis.commanders,
        strategies=analysis.strategies,
        colors=analysis.colors,
        most_played_commander=analysis.most_played_commander,
        favorite_strategy=analysis.favorite_strategy,
        favorite_colors=analysis.favorite_colors,
        staples=[
            StapleResponse(name=s.name, appearances=s.appearances) for s in engine.identify_staples()
        ],
        gaps=[
            GapResponse(type=g.type, description=g.description, suggestion=g.suggestion)
            for g in engine.identify_gaps()
        ],
    )


@router.get("/{session_id}/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(session_id: str, registry: Registry) -> RecommendationsResponse:
    engine = registry.get(session_id).engine
    bundle = engine.generate_recommendations()
    suggestion = engine.suggest_new_archetype()

    return RecommendationsResponse(
        build_on_strengths=bundle.build_on_strengths,
        explore_new=bundle.explore_new,
        upgrades=bundle.upgrades,
        budget_options=bundle.budget_options,
        next_archetype=NextArchetypeResponse(
            archetype=suggestion.archetype,
            reason=suggestion.reason,
        ),
    )


@router.post("/{session_id}/budget", response_model=BudgetResponse)
async def suggest_budget(
    session_id: str,
    request: BudgetRequest,
    registry: Registry,
) -> BudgetResponse:
    """Budget substitutions. Always placeholders until pricing data is integrated."""
    report = registry.get(session_id).engine.suggest_budget_substitutions(request.cards)
    return BudgetResponse(
        note=report.note,
        suggestion=report.suggestion,
        placeholders=[
            BudgetPlaceholderResponse(original=p.original, needs_pricing_data=p.needs_pricing_data)
            for p in report.placeholders
        ],
    )


@router.post("/{session_id}/knowledge", response_model=KnowledgeSummaryResponse, status_code=201)
async def add_knowledge(
    session_id: str,
    request: KnowledgeRequest,
    registry: Registry,
) -> KnowledgeSummaryResponse:
    summary = registry.get(session_id).knowledge.add(
        KnowledgeEntry(
            title=request.title,
            author=request.author,
            url=request.url,
            commander=request.commander,
            strategy=request.strategy,
            cards=tuple(request.cards),
        )
    )
    return KnowledgeSummaryResponse(
        video=summary.video,
        creator=summary.creator,
        commander=summary.commander,
        strategy=summary.strategy,
        deck_available=summary.deck_available,
        card_count=summary.card_count,
    )


@router.get("/{session_id}/knowledge", response_model=KnowledgeListResponse)
async def search_knowledge(
    session_id: str,
    registry: Registry,
    commander: Annotated[str | None, Query()] = None,
    strategy: Annotated[str | None, Query()] = None,
) -> KnowledgeListResponse:
    """
    List deck techs.

    Filters by commander or strategy (substring, case-insensitive) when given;
    commander wins if both are set.
    """
    knowledge = registry.get(session_id).knowledge
    if commander:
        entries = knowledge.search_by_commander(commander)
    elif strategy:
        entries = knowledge.search_by_strategy(strategy)
    else:
        entries = list(knowledge.entries)

    return KnowledgeListResponse(
        session_id=session_id,
        entries=[_knowledge_response(entry) for entry in entries],
        count=len(entries),
    )


@router.get("/{session_id}/knowledge/export", response_model=ExportResponse)
async def export_knowledge(session_id: str, registry: Registry) -> ExportResponse:
    return ExportResponse(
        session_id=session_id,
        payload=registry.get(session_id).knowledge.export_knowledge(),
    )


@router.post("/{session_id}/knowledge/import", response_model=ImportResponse)
async def import_knowledge(
    session_id: str,
    request: PayloadRequest,
    registry: Registry,
) -> ImportResponse:
    """Best-effort import; a malformed payload leaves the knowledge base empty."""
    imported = registry.get(session_id).knowledge.import_knowledge(request.payload)
    return ImportResponse(session_id=session_id, imported=imported)


@router.post("/{session_id}/tools/{tool_name}")
def run_tool(
    session_id: str,
    tool_name: str,
    request: ToolRequest,
    registry: Registry,
    goldfish: Annotated[MtgGoldfishClient, Depends(get_goldfish_client)],
    moxfield: Annotated[MoxfieldClient, Depends(get_moxfield_client)],
) -> dict[str, Any]:
    """Run an agent tool against this session's state."""
    state = registry.get(session_id)
    context = ToolContext(
        meta_source=goldfish,
        moxfield=moxfield,
        goldfish=goldfish,
        engine=state.engine,
        knowledge=state.knowledge,
    )
    return execute_tool(context, tool_name, request.arguments)
