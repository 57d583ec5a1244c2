"""
Deck API endpoints.

Validates pasted decklists against singleton format rules and strips
duplicate cards.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from deckinsight.analysis.legality import (
    DEFAULT_DECK_SIZE,
    remove_duplicates,
    validate_parsed_deck,
)
from deckinsight.parsers.decklist import format_deck_list, parse_deck_list

router = APIRouter(prefix="/decks", tags=["decks"])


class CardResponse(BaseModel):
    quantity: int
    name: str


class DuplicateResponse(BaseModel):
    name: str
    count: int


class DeckListRequest(BaseModel):
    """Request model carrying a raw decklist."""

    deck_list: str = Field(
        ...,
        description="Decklist text, one card per line",
        examples=["1 Sol Ring\n1x Arcane Signet\n35 Forest"],
    )


class ValidateRequest(DeckListRequest):
    """Request model for deck validation."""

    expected_size: int = Field(default=DEFAULT_DECK_SIZE, ge=1)
    is_mono_color: bool = Field(
        default=False,
        description="Mono-color decks get a lower recommended land count",
    )


class ValidationResponse(BaseModel):
    """Response model for deck validation."""

    is_valid: bool
    total_cards: int
    unique_cards: int
    land_count: int
    duplicates: list[DuplicateResponse] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class DedupeResponse(BaseModel):
    """Response model for duplicate removal."""

    removed: int = Field(description="Card copies dropped from the list")
    cards: list[CardResponse]
    deck_list: str


@router.post("/validate", response_model=ValidationResponse)
async def validate_deck(request: ValidateRequest) -> ValidationResponse:
    """
    Validate a decklist for a singleton format.

    Problems are reported in the response body; an invalid deck is still
    a 200.
    """
    cards = parse_deck_list(request.deck_list)
    result = validate_parsed_deck(
        cards,
        expected_size=request.expected_size,
        is_mono_color=request.is_mono_color,
    )

    return ValidationResponse(
        is_valid=result.is_valid,
        total_cards=result.total_cards,
        unique_cards=result.unique_cards,
        land_count=result.land_count,
        duplicates=[DuplicateResponse(name=d.name, count=d.count) for d in result.duplicates],
        errors=result.errors,
        warnings=result.warnings,
    )


@router.post("/dedupe", response_model=DedupeResponse)
async def dedupe_deck(request: DeckListRequest) -> DedupeResponse:
    """Remove repeated non-basic cards, keeping the first occurrence of each."""
    cards = parse_deck_list(request.deck_list)
    deduped = remove_duplicates(cards)

    return DedupeResponse(
        removed=sum(c.quantity for c in cards) - sum(c.quantity for c in deduped),
        cards=[CardResponse(quantity=c.quantity, name=c.name) for c in deduped],
        deck_list=format_deck_list(deduped),
    )
