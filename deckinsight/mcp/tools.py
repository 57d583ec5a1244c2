"""
Agent tool definitions.

Defines the tools a conversational agent can call to validate decks,
read the metagame and analyze player profiles. Every tool returns a
JSON-friendly dict; known failures come back as {"error": ...} instead of
raising so the agent can relay them.

Dispatch goes through TOOL_HANDLERS, keyed by ToolName, after the arguments
are validated against the tool's model in TOOL_ARGUMENTS. Names outside the
enum take the fallback branch in execute_tool.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from deckinsight.analysis.legality import DEFAULT_DECK_SIZE, validate_deck_list
from deckinsight.analysis.meta_trends import MetaDeckSource, analyze_format
from deckinsight.analysis.profile_insights import (
    GoldfishProfileSource,
    MoxfieldProfileSource,
    analyze_goldfish_profile,
    analyze_moxfield_profile,
)
from deckinsight.analysis.recommendations import RecommendationEngine
from deckinsight.models.failure import KnownError
from deckinsight.models.profile import ProfileAnalysis
from deckinsight.services.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)


class ToolName(str, Enum):
    VALIDATE_DECK = "validate_deck"
    ANALYZE_FORMAT_META = "analyze_format_meta"
    ANALYZE_MOXFIELD_PROFILE = "analyze_moxfield_profile"
    ANALYZE_MTGGOLDFISH_PROFILE = "analyze_mtggoldfish_profile"
    GET_RECOMMENDATIONS = "get_recommendations"
    SUGGEST_DECK_TECHS = "suggest_deck_techs"


@dataclass
class ToolDefinition:
    """Definition of an agent tool."""

    name: ToolName
    description: str
    parameters: dict[str, Any]


@dataclass
class ToolContext:
    """
    Collaborators available to tool handlers.

    One context per session: the engine and knowledge base hold that
    session's history.
    """

    meta_source: MetaDeckSource
    moxfield: MoxfieldProfileSource
    goldfish: GoldfishProfileSource
    engine: RecommendationEngine = field(default_factory=RecommendationEngine)
    knowledge: KnowledgeBase = field(default_factory=KnowledgeBase)


TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name=ToolName.VALIDATE_DECK,
        description="Validate a singleton deck list: duplicates, deck size and land count.",
        parameters={
            "type": "object",
            "properties": {
                "deck_list": {
                    "type": "string",
                    "description": "Deck list, one '<qty> <name>' line per card",
                },
                "expected_size": {
                    "type": "integer",
                    "description": "Required deck size",
                    "default": DEFAULT_DECK_SIZE,
                },
                "is_mono_color": {
                    "type": "boolean",
                    "description": "Use the mono-color land target",
                    "default": False,
                },
            },
            "required": ["deck_list"],
        },
    ),
    ToolDefinition(
        name=ToolName.ANALYZE_FORMAT_META,
        description="Analyze the current metagame for a format: top decks, shares and trends.",
        parameters={
            "type": "object",
            "properties": {
                "format": {
                    "type": "string",
                    "description": "Format to analyze (e.g., commander, modern)",
                    "default": "commander",
                },
            },
            "required": [],
        },
    ),
    ToolDefinition(
        name=ToolName.ANALYZE_MOXFIELD_PROFILE,
        description="Analyze a Moxfield user's public decks for preferences and gaps.",
        parameters={
            "type": "object",
            "properties": {
                "username": {
                    "type": "string",
                    "description": "Moxfield username",
                },
            },
            "required": ["username"],
        },
    ),
    ToolDefinition(
        name=ToolName.ANALYZE_MTGGOLDFISH_PROFILE,
        description="Analyze an MTGGoldfish player's recent decks.",
        parameters={
            "type": "object",
            "properties": {
                "username": {
                    "type": "string",
                    "description": "MTGGoldfish username",
                },
            },
            "required": ["username"],
        },
    ),
    ToolDefinition(
        name=ToolName.GET_RECOMMENDATIONS,
        description="Personalized recommendations from the decks built in this session.",
        parameters={
            "type": "object",
            "properties": {},
            "required": [],
        },
    ),
    ToolDefinition(
        name=ToolName.SUGGEST_DECK_TECHS,
        description="Find learned deck techs for a commander or strategy.",
        parameters={
            "type": "object",
            "properties": {
                "commander": {
                    "type": "string",
                    "description": "Commander name to search for",
                },
                "strategy": {
                    "type": "string",
                    "description": "Strategy to search for (e.g., tokens)",
                },
            },
            "required": [],
        },
    ),
]


def validate_deck_tool(
    deck_list: str,
    expected_size: int = DEFAULT_DECK_SIZE,
    is_mono_color: bool = False,
) -> dict[str, Any]:
    """
    Validate a deck list.

    Returns:
        Dict with validity, counts, duplicates, errors and warnings
    """
    result = validate_deck_list(deck_list, expected_size=expected_size, is_mono_color=is_mono_color)

    return {
        "is_valid": result.is_valid,
        "total_cards": result.total_cards,
        "unique_cards": result.unique_cards,
        "land_count": result.land_count,
        "duplicates": [{"name": d.name, "count": d.count} for d in result.duplicates],
        "errors": result.errors,
        "warnings": result.warnings,
    }


def analyze_format_meta_tool(source: MetaDeckSource, format_name: str = "commander") -> dict[str, Any]:
    """
    Analyze a format's metagame.

    A failed fetch still returns the (empty) analysis, with `fetch_error`
    describing what went wrong.
    """
    analysis = analyze_format(format_name, source)

    return {
        "format": analysis.format,
        "timestamp": analysis.timestamp,
        "total_decks": analysis.total_decks,
        "summary": analysis.summary,
        "top_decks": [
            {"name": record.name, "meta_share": record.meta_share, "url": record.url}
            for record in analysis.top_decks
        ],
        "trends": {
            "popular": analysis.trends.popular,
            "emerging": analysis.trends.emerging,
            "declining": analysis.trends.declining,
        },
        "fetch_error": analysis.fetch_error.message if analysis.fetch_error else None,
    }


def _profile_result(analysis: ProfileAnalysis) -> dict[str, Any]:
    result: dict[str, Any] = {
        "platform": analysis.platform,
        "username": analysis.username,
        "total_decks": analysis.total_decks,
        "insights": analysis.insights,
        "recommendations": analysis.recommendations,
        "top_commanders": [
            {"name": entry.name, "count": entry.count} for entry in analysis.top_commanders
        ],
    }
    if analysis.analyzed_decks is not None:
        result["analyzed_decks"] = analysis.analyzed_decks
    return result


def analyze_moxfield_profile_tool(source: MoxfieldProfileSource, username: str) -> dict[str, Any]:
    try:
        analysis = analyze_moxfield_profile(username, source)
    except KnownError as e:
        return {"error": e.message}
    return _profile_result(analysis)


def analyze_mtggoldfish_profile_tool(source: GoldfishProfileSource, username: str) -> dict[str, Any]:
    try:
        analysis = analyze_goldfish_profile(username, source)
    except KnownError as e:
        return {"error": e.message}
    return _profile_result(analysis)


def get_recommendations_tool(engine: RecommendationEngine) -> dict[str, Any]:
    """Recommendations grouped by intent, plus the gaps they were derived from."""
    bundle = engine.generate_recommendations()

    return {
        "decks_in_history": len(engine.history),
        "build_on_strengths": bundle.build_on_strengths,
        "explore_new": bundle.explore_new,
        "upgrades": bundle.upgrades,
        "budget_options": bundle.budget_options,
        "gaps": [
            {"type": gap.type, "description": gap.description, "suggestion": gap.suggestion}
            for gap in engine.identify_gaps()
        ],
    }


def suggest_deck_techs_tool(
    knowledge: KnowledgeBase,
    commander: str | None = None,
    strategy: str | None = None,
) -> dict[str, Any]:
    """Learned deck techs matching a commander and/or strategy."""
    if not commander and not strategy:
        return {"error": "Provide a commander or a strategy to search for"}

    matches = []
    if commander:
        matches.extend(knowledge.search_by_commander(commander))
    if strategy:
        matches.extend(entry for entry in knowledge.search_by_strategy(strategy) if entry not in matches)

    return {
        "count": len(matches),
        "deck_techs": [entry.to_dict() for entry in matches],
    }


class ValidateDeckArgs(BaseModel):
    deck_list: str
    expected_size: int = Field(default=DEFAULT_DECK_SIZE, ge=1)
    is_mono_color: bool = False


class FormatMetaArgs(BaseModel):
    format: str = "commander"


class ProfileArgs(BaseModel):
    username: str = Field(..., min_length=1)


class NoArgs(BaseModel):
    pass


class DeckTechArgs(BaseModel):
    commander: str | None = None
    strategy: str | None = None


# Arguments are validated against these models before a handler runs
TOOL_ARGUMENTS: dict[ToolName, type[BaseModel]] = {
    ToolName.VALIDATE_DECK: ValidateDeckArgs,
    ToolName.ANALYZE_FORMAT_META: FormatMetaArgs,
    ToolName.ANALYZE_MOXFIELD_PROFILE: ProfileArgs,
    ToolName.ANALYZE_MTGGOLDFISH_PROFILE: ProfileArgs,
    ToolName.GET_RECOMMENDATIONS: NoArgs,
    ToolName.SUGGEST_DECK_TECHS: DeckTechArgs,
}

ToolHandler = Callable[[ToolContext, Any], dict[str, Any]]

TOOL_HANDLERS: dict[ToolName, ToolHandler] = {
    ToolName.VALIDATE_DECK: lambda ctx, args: validate_deck_tool(
        deck_list=args.deck_list,
        expected_size=args.expected_size,
        is_mono_color=args.is_mono_color,
    ),
    ToolName.ANALYZE_FORMAT_META: lambda ctx, args: analyze_format_meta_tool(
        ctx.meta_source,
        format_name=args.format,
    ),
    ToolName.ANALYZE_MOXFIELD_PROFILE: lambda ctx, args: analyze_moxfield_profile_tool(
        ctx.moxfield,
        username=args.username,
    ),
    ToolName.ANALYZE_MTGGOLDFISH_PROFILE: lambda ctx, args: analyze_mtggoldfish_profile_tool(
        ctx.goldfish,
        username=args.username,
    ),
    ToolName.GET_RECOMMENDATIONS: lambda ctx, args: get_recommendations_tool(ctx.engine),
    ToolName.SUGGEST_DECK_TECHS: lambda ctx, args: suggest_deck_techs_tool(
        ctx.knowledge,
        commander=args.commander,
        strategy=args.strategy,
    ),
}


def _argument_error(error: ValidationError) -> str:
    first = error.errors()[0]
    field_name = ".".join(str(part) for part in first["loc"]) or "arguments"
    if first["type"] == "missing":
        return f"Missing required argument: {field_name}"
    return f"Invalid argument {field_name}: {first['msg']}"


def execute_tool(
    context: ToolContext,
    tool_name: str,
    arguments: dict[str, Any],
) -> dict[str, Any]:
    """
    Execute an agent tool by name.

    Args:
        context: Collaborators and session state
        tool_name: Name of the tool to execute
        arguments: Tool arguments

    Returns:
        Tool result as dict. Unknown tool names, missing required arguments
        and arguments of the wrong type return {"error": ...}.
    """
    try:
        name = ToolName(tool_name)
    except ValueError:
        logger.warning("Unknown tool requested: %s", tool_name)
        return {"error": f"Unknown tool: {tool_name}"}

    try:
        args = TOOL_ARGUMENTS[name].model_validate(arguments)
    except ValidationError as e:
        message = _argument_error(e)
        logger.warning("Tool %s rejected its arguments: %s", tool_name, message)
        return {"error": message}

    return TOOL_HANDLERS[name](context, args)
