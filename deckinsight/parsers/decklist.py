"""
Parser for free-text decklists.

Accepted line shapes:
    1x Sol Ring
    1 Arcane Signet
    Forest                  (bare name, quantity 1)

Decklists pasted from articles and chat are noisy. Markup headings
("# Lands", "**Creatures**") and section labels ("Commander:",
"Win Conditions") are skipped. Anything else that does not look like a
card line is dropped silently; parsing never fails.
"""

import re

from deckinsight.models.card import CardEntry

# Pattern: "1x Sol Ring", "1X Sol Ring" or "1 Sol Ring"
# Groups: (quantity, card_name)
CARD_LINE_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

MARKUP_PREFIXES = ("#", "**")

# A line containing one of these words is a section label, unless it starts
# with a digit ("1 Land Tax" is a card line).
SECTION_WORDS = (
    "commander",
    "creatures",
    "lands",
    "artifacts",
    "enchantments",
    "instants",
    "sorceries",
    "planeswalkers",
    "strategy",
    "win condition",
)

# Bare names must be longer than this to count as a card
MIN_BARE_NAME_LENGTH = 2


def _is_section_label(line: str) -> bool:
    if line[0].isdigit():
        return False
    lowered = line.lower()
    return any(word in lowered for word in SECTION_WORDS)


def parse_deck_list(text: str | None) -> list[CardEntry]:
    """
    Parse decklist text into card entries.

    Args:
        text: Raw decklist, one card per line

    Returns:
        CardEntry list in input order. Empty if nothing parsed.
    """
    if not text or not text.strip():
        return []

    cards: list[CardEntry] = []

    for raw_line in text.splitlines():
        line = raw_line.strip()

        # Skip empty lines
        if not line:
            continue

        # Skip markup headings
        if line.startswith(MARKUP_PREFIXES):
            continue

        # Skip section labels
        if _is_section_label(line):
            continue

        match = CARD_LINE_PATTERN.match(line)
        if match:
            quantity, name = match.groups()
            name = name.strip()
            # "0 Sol Ring" carries no card
            if int(quantity) >= 1 and name:
                cards.append(CardEntry(quantity=int(quantity), name=name))
            continue

        # Bare card name: no leading count, no "Label: value" colon
        if (
            not line[0].isdigit()
            and ":" not in line
            and len(line) > MIN_BARE_NAME_LENGTH
        ):
            cards.append(CardEntry(quantity=1, name=line))

        # Anything else is noise - skip silently

    return cards


def format_deck_list(cards: list[CardEntry]) -> str:
    """
    Render card entries back to decklist text.

    One "<qty>x <name>" line per entry, in input order. Re-parsing the
    output reproduces the same quantities and names.
    """
    return "\n".join(f"{card.quantity}x {card.name}" for card in cards)
