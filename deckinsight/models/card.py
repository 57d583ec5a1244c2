from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    A single decklist line resolved to a quantity and a card name.

    Attributes:
        quantity: Number of copies on the line (always >= 1)
        name: Card name as written, surrounding whitespace removed
    """

    quantity: int
    name: str

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"Card quantity must be at least 1, got {self.quantity}")
        if not self.name or not self.name.strip():
            raise ValueError("Card name must not be empty")


# Decklists keep insertion order; it matters for formatting, not validation.
ParsedDeck = list[CardEntry]
