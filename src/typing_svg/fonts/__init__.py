"""Font loading and character width measurement."""

from .metrics import CharacterWidthOracle, is_emoji, load_font

__all__ = [
    "CharacterWidthOracle",
    "is_emoji",
    "load_font",
]
