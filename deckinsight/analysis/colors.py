"""Color identity helpers shared by profile and history analysis."""

from collections.abc import Iterable

# Closed alphabet of color identity letters, in WUBRG order
ALL_COLORS: tuple[str, ...] = ("W", "U", "B", "R", "G")

COLOR_NAMES: dict[str, str] = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
}


def color_name(letter: str) -> str:
    """Full name for a color letter; unknown letters are returned unchanged."""
    return COLOR_NAMES.get(letter, letter)


def color_combo_key(letters: Iterable[str]) -> str:
    """
    Build the frequency-map key for a color identity.

    Letters outside W/U/B/R/G are dropped, the rest are deduplicated and
    sorted alphabetically: ["W", "U"] -> "UW", ["G", "B"] -> "BG".
    """
    valid = {letter.upper() for letter in letters if letter and letter.upper() in COLOR_NAMES}
    return "".join(sorted(valid))


def played_colors(combo_keys: Iterable[str]) -> set[str]:
    """Union of letters used across color combo keys."""
    played: set[str] = set()
    for key in combo_keys:
        played.update(key)
    return played


def unplayed_colors(combo_keys: Iterable[str]) -> list[str]:
    """Letters never used by any combo, in WUBRG order."""
    played = played_colors(combo_keys)
    return [letter for letter in ALL_COLORS if letter not in played]
