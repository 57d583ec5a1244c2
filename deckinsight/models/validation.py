from dataclasses import dataclass, field

from deckinsight.models.card import CardEntry


@dataclass(frozen=True, slots=True)
class DuplicateCard:
    """A non-basic card that appears more than once in a singleton deck."""

    name: str
    count: int


@dataclass
class ValidationResult:
    """
    Outcome of checking a parsed deck against a singleton format.

    Findings are reported, never raised. Callers decide how to react
    to a non-empty `errors` list.

    Attributes:
        total_cards: Sum of all quantities, basic lands included
        unique_cards: Distinct non-basic card names (case-insensitive)
        land_count: Heuristic land count (see analysis.legality)
        duplicates: Non-basic cards whose summed count exceeds 1
        errors: Rule violations (duplicates, deck size)
        warnings: Advisory findings (low land count)
        cards: The deck that was validated
    """

    total_cards: int
    unique_cards: int
    land_count: int
    duplicates: list[DuplicateCard] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cards: list[CardEntry] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no errors were found."""
        return not self.errors

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicates)
