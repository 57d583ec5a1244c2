"""
Singleton format legality checks for parsed decklists.

Validation reports problems, it never raises:
- duplicate non-basic cards are errors
- a total that differs from the expected deck size is an error
- a low land count is a warning

Land detection is a name heuristic. Without a card database there is no
way to know a card's type, so "Land Tax" counts as a land and
"Command Tower" does not. Treat `land_count` as an estimate.
"""

from deckinsight.analysis.aggregator import build_frequency_map
from deckinsight.models.card import CardEntry
from deckinsight.models.validation import DuplicateCard, ValidationResult
from deckinsight.parsers.decklist import parse_deck_list

DEFAULT_DECK_SIZE = 100

# Recommended land counts for singleton decks
MULTICOLOR_LAND_TARGET = 36
MONO_COLOR_LAND_TARGET = 32
# Warn only when this far below the target
LAND_WARNING_TOLERANCE = 5

# Basic lands may appear any number of times
BASIC_LANDS = frozenset(
    {
        "plains",
        "island",
        "swamp",
        "mountain",
        "forest",
        "wastes",
        "snow-covered plains",
        "snow-covered island",
        "snow-covered swamp",
        "snow-covered mountain",
        "snow-covered forest",
    }
)

# Substrings that usually mean "this is a land" (temples, fountains,
# shocklands, guildgates, "...Land" cycles)
LAND_NAME_HINTS = ("land", "temple", "fountain", "shock", "gate")


def is_basic_land(card_name: str) -> bool:
    """Check if a card is a basic land (case-insensitive exact name match)."""
    return card_name.strip().lower() in BASIC_LANDS


def _looks_like_land(card_name: str) -> bool:
    name_lower = card_name.lower()
    return name_lower in BASIC_LANDS or any(hint in name_lower for hint in LAND_NAME_HINTS)


def validate_parsed_deck(
    cards: list[CardEntry],
    expected_size: int = DEFAULT_DECK_SIZE,
    is_mono_color: bool = False,
) -> ValidationResult:
    """
    Validate a parsed deck for a singleton format.

    Args:
        cards: Parsed card entries (repeated names are summed)
        expected_size: Exact number of cards the deck must contain
        is_mono_color: Mono-color decks get a lower recommended land count

    Returns:
        ValidationResult with errors, warnings and counts
    """
    errors: list[str] = []
    warnings: list[str] = []

    total_cards = sum(card.quantity for card in cards)
    land_count = sum(card.quantity for card in cards if _looks_like_land(card.name))

    # Singleton check ignores basic lands; names compare case-insensitively
    card_counts = build_frequency_map(
        (card.name.lower(), card.quantity) for card in cards if not is_basic_land(card.name)
    )

    duplicates = [
        DuplicateCard(name=name, count=count) for name, count in card_counts.items() if count > 1
    ]
    for duplicate in duplicates:
        errors.append(
            f'Duplicate card: "{duplicate.name}" appears {duplicate.count} times '
            "(singleton format allows only 1)"
        )

    if total_cards < expected_size:
        errors.append(
            f"Deck has only {total_cards} cards "
            f"(needs exactly {expected_size}, short by {expected_size - total_cards})"
        )
    elif total_cards > expected_size:
        errors.append(
            f"Deck has {total_cards} cards "
            f"(maximum is {expected_size}, over by {total_cards - expected_size})"
        )

    expected_lands = MONO_COLOR_LAND_TARGET if is_mono_color else MULTICOLOR_LAND_TARGET
    if land_count < expected_lands - LAND_WARNING_TOLERANCE:
        warnings.append(
            f"Deck may have too few lands: ~{land_count} detected "
            f"(recommended: {expected_lands})"
        )

    return ValidationResult(
        total_cards=total_cards,
        unique_cards=len(card_counts),
        land_count=land_count,
        duplicates=duplicates,
        errors=errors,
        warnings=warnings,
        cards=list(cards),
    )


def validate_deck_list(
    deck_text: str,
    expected_size: int = DEFAULT_DECK_SIZE,
    is_mono_color: bool = False,
) -> ValidationResult:
    """Convenience function: parse decklist text and validate it."""
    cards = parse_deck_list(deck_text)
    return validate_parsed_deck(cards, expected_size=expected_size, is_mono_color=is_mono_color)


def remove_duplicates(cards: list[CardEntry]) -> list[CardEntry]:
    """
    Drop repeated non-basic cards, keeping the first occurrence at quantity 1.

    Basic lands pass through unchanged, every occurrence. Idempotent.
    """
    seen: set[str] = set()
    result: list[CardEntry] = []

    for card in cards:
        if is_basic_land(card.name):
            result.append(card)
            continue

        name_lower = card.name.lower()
        if name_lower in seen:
            continue
        seen.add(name_lower)
        result.append(CardEntry(quantity=1, name=card.name))

    return result
