"""Tests for singleton format validation."""

from deckinsight.analysis.legality import (
    DEFAULT_DECK_SIZE,
    is_basic_land,
    remove_duplicates,
    validate_deck_list,
    validate_parsed_deck,
)
from deckinsight.models.card import CardEntry


def _legal_deck() -> list[CardEntry]:
    """Exactly 100 cards: 64 singletons plus 36 basics."""
    spells = [CardEntry(quantity=1, name=f"Spell {i}") for i in range(64)]
    return [*spells, CardEntry(quantity=20, name="Forest"), CardEntry(quantity=16, name="Island")]


class TestIsBasicLand:
    def test_basic_names(self) -> None:
        for name in ["Plains", "Island", "Swamp", "Mountain", "Forest", "Wastes"]:
            assert is_basic_land(name)

    def test_snow_covered(self) -> None:
        assert is_basic_land("Snow-Covered Forest")

    def test_case_insensitive(self) -> None:
        assert is_basic_land("FOREST")
        assert is_basic_land(" island ")

    def test_nonbasic_lands(self) -> None:
        assert not is_basic_land("Command Tower")
        assert not is_basic_land("Forest Temple")


class TestValidateParsedDeck:
    def test_legal_deck(self) -> None:
        result = validate_parsed_deck(_legal_deck())

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []
        assert result.total_cards == DEFAULT_DECK_SIZE
        assert result.unique_cards == 64

    def test_basic_lands_are_exempt_from_singleton(self) -> None:
        result = validate_parsed_deck(_legal_deck())

        assert not result.has_duplicates

    def test_duplicate_detected_case_insensitively(self) -> None:
        cards = [CardEntry(quantity=1, name="Sol Ring"), CardEntry(quantity=1, name="sol ring")]
        result = validate_parsed_deck(cards)

        assert result.duplicates[0].name == "sol ring"
        assert result.duplicates[0].count == 2
        assert (
            'Duplicate card: "sol ring" appears 2 times (singleton format allows only 1)'
            in result.errors
        )

    def test_multiple_copies_on_one_line_are_duplicates(self) -> None:
        result = validate_parsed_deck([CardEntry(quantity=3, name="Sol Ring")])

        assert result.duplicates[0].count == 3

    def test_each_duplicate_listed_once(self) -> None:
        cards = [
            CardEntry(quantity=1, name="Sol Ring"),
            CardEntry(quantity=1, name="Sol Ring"),
            CardEntry(quantity=1, name="Sol Ring"),
        ]
        result = validate_parsed_deck(cards)

        assert len(result.duplicates) == 1
        assert sum("Duplicate card" in e for e in result.errors) == 1

    def test_short_deck(self) -> None:
        cards = [CardEntry(quantity=1, name="Sol Ring"), CardEntry(quantity=35, name="Forest")]
        result = validate_parsed_deck(cards)

        assert "Deck has only 36 cards (needs exactly 100, short by 64)" in result.errors

    def test_oversized_deck(self) -> None:
        cards = [*_legal_deck(), CardEntry(quantity=2, name="Plains")]
        result = validate_parsed_deck(cards)

        assert "Deck has 102 cards (maximum is 100, over by 2)" in result.errors

    def test_custom_deck_size(self) -> None:
        cards = [CardEntry(quantity=60, name="Mountain")]
        result = validate_parsed_deck(cards, expected_size=60)

        assert not any("cards" in e for e in result.errors)

    def test_total_equals_sum_of_quantities(self) -> None:
        cards = [CardEntry(quantity=4, name="Forest"), CardEntry(quantity=1, name="Sol Ring")]
        result = validate_parsed_deck(cards)

        assert result.total_cards == 5

    def test_low_land_warning(self) -> None:
        spells = [CardEntry(quantity=1, name=f"Spell {i}") for i in range(70)]
        cards = [*spells, CardEntry(quantity=30, name="Forest")]
        result = validate_parsed_deck(cards)

        assert result.is_valid
        assert result.warnings == [
            "Deck may have too few lands: ~30 detected (recommended: 36)"
        ]

    def test_land_warning_tolerance(self) -> None:
        """31 lands is within tolerance of 36; 30 is not."""
        spells = [CardEntry(quantity=1, name=f"Spell {i}") for i in range(69)]
        cards = [*spells, CardEntry(quantity=31, name="Forest")]

        assert validate_parsed_deck(cards).warnings == []

    def test_mono_color_land_target(self) -> None:
        spells = [CardEntry(quantity=1, name=f"Spell {i}") for i in range(72)]
        cards = [*spells, CardEntry(quantity=28, name="Mountain")]

        assert validate_parsed_deck(cards, is_mono_color=True).warnings == []
        assert validate_parsed_deck(cards, is_mono_color=False).warnings == [
            "Deck may have too few lands: ~28 detected (recommended: 36)"
        ]

    def test_land_name_heuristic(self) -> None:
        """Name hints count nonbasic lands; cards without a hint do not count."""
        cards = [
            CardEntry(quantity=1, name="Temple of Malady"),
            CardEntry(quantity=1, name="Breeding Pool"),
            CardEntry(quantity=1, name="Command Tower"),
            CardEntry(quantity=1, name="Land Tax"),
        ]
        result = validate_parsed_deck(cards)

        assert result.land_count == 2

    def test_validates_from_text(self, sample_deck_list: str) -> None:
        result = validate_deck_list(sample_deck_list)

        assert not result.is_valid
        assert result.total_cards == 20
        assert [d.name for d in result.duplicates] == ["sol ring"]


class TestRemoveDuplicates:
    def test_keeps_first_occurrence(self) -> None:
        cards = [
            CardEntry(quantity=1, name="Sol Ring"),
            CardEntry(quantity=1, name="Arcane Signet"),
            CardEntry(quantity=1, name="sol ring"),
        ]
        result = remove_duplicates(cards)

        assert result == [
            CardEntry(quantity=1, name="Sol Ring"),
            CardEntry(quantity=1, name="Arcane Signet"),
        ]

    def test_collapses_quantity_to_one(self) -> None:
        result = remove_duplicates([CardEntry(quantity=3, name="Sol Ring")])

        assert result == [CardEntry(quantity=1, name="Sol Ring")]

    def test_basic_lands_pass_through(self) -> None:
        cards = [CardEntry(quantity=20, name="Forest"), CardEntry(quantity=5, name="Forest")]

        assert remove_duplicates(cards) == cards

    def test_result_has_no_duplicates(self, sample_deck_list: str) -> None:
        result = validate_deck_list(sample_deck_list)
        deduped = remove_duplicates(result.cards)

        assert not validate_parsed_deck(deduped).has_duplicates

    def test_idempotent(self, sample_deck_list: str) -> None:
        cards = validate_deck_list(sample_deck_list).cards
        once = remove_duplicates(cards)

        assert remove_duplicates(once) == once
