from deckinsight.parsers.decklist import format_deck_list, parse_deck_list

__all__ = [
    "format_deck_list",
    "parse_deck_list",
]
