"""Character width oracle backed by TrueType metrics.

Widths come from Pillow's ``FreeTypeFont.getlength`` when a font file could be
loaded, scaled from a fixed reference size. Without a font every character is
approximated as half the font size wide (emoji a bit wider), so synthesis
always completes.
"""

import logging
import unicodedata
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import ImageFont

from ..constants import (
    FALLBACK_ASCENT_COEFFICIENT,
    FALLBACK_CHAR_WIDTH_COEFFICIENT,
    FALLBACK_EMOJI_WIDTH_MULTIPLIER,
)

if TYPE_CHECKING:
    from ..timeline.lines import StyledSpan

logger = logging.getLogger(__name__)

_REFERENCE_SIZE = 1000


def is_emoji(char: str) -> bool:
    """Return True for pictographic characters that render as emoji."""
    if not char:
        return False
    cp = ord(char[0])
    if cp in (0xFE0F, 0x200D):
        return True
    if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
        return True
    if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
        return True
    if cp >= 0x1F000:
        return unicodedata.category(char[0]) == "So"
    if 0x2600 <= cp <= 0x27BF:  # Miscellaneous symbols and dingbats
        return True
    return False


def load_font(font_path: str | Path) -> ImageFont.FreeTypeFont | None:
    """Load a TrueType/OpenType font at the reference size, or None on failure."""
    try:
        return ImageFont.truetype(str(font_path), _REFERENCE_SIZE)
    except OSError as exc:
        logger.warning("Failed to load font %s: %s. Using approximate widths.", font_path, exc)
        return None


class CharacterWidthOracle:
    """Measures rendered character and text widths for one font.

    Styled spans may override the font size; every span is measured with the
    same font file.
    """

    def __init__(self, font: ImageFont.FreeTypeFont | None = None):
        """
        Initialize the oracle.

        Args:
            font: Font loaded at the reference size, or None for fallback widths
        """
        self.font = font
        self._advance_cache: dict[str, float] = {}

    @classmethod
    def from_font_path(cls, font_path: str | Path | None) -> "CharacterWidthOracle":
        """Build an oracle from a font file; an unreadable file falls back to approximations."""
        return cls(load_font(font_path) if font_path else None)

    @property
    def has_metrics(self) -> bool:
        return self.font is not None

    def char_width(self, char: str, font_size: float) -> float:
        """Advance width of one character in pixels, without letter spacing."""
        if self.font is None:
            width = font_size * FALLBACK_CHAR_WIDTH_COEFFICIENT
            if is_emoji(char):
                width *= FALLBACK_EMOJI_WIDTH_MULTIPLIER
            return width
        if is_emoji(char):
            return float(font_size)
        return self._advance(char) * font_size / _REFERENCE_SIZE

    def text_width(
        self,
        text: str,
        font_size: float,
        letter_spacing: float = 0.0,
    ) -> float:
        """Width of plain text with spacing between (not after) characters."""
        chars = list(text)
        if not chars:
            return 0.0
        total = sum(self.char_width(char, font_size) for char in chars)
        return total + letter_spacing * (len(chars) - 1)

    def span_width(
        self,
        spans: Iterable["StyledSpan"],
        font_size: float,
        letter_spacing: float = 0.0,
    ) -> float:
        """Width of styled text; each span may override the font size."""
        widths = self._char_widths(spans, font_size)
        if not widths:
            return 0.0
        return sum(widths) + letter_spacing * (len(widths) - 1)

    def prefix_widths(
        self,
        spans: Iterable["StyledSpan"],
        font_size: float,
        letter_spacing: float = 0.0,
    ) -> list[float]:
        """Accumulated widths ``[0, w(1 char), w(2 chars), ..., w(all)]``."""
        widths = [0.0]
        accumulated = 0.0
        for position, width in enumerate(self._char_widths(spans, font_size)):
            if position > 0:
                accumulated += letter_spacing
            accumulated += width
            widths.append(accumulated)
        return widths

    def ascent(self, font_size: float) -> float:
        """Distance from the baseline to the top of the tallest glyphs."""
        if self.font is None:
            return font_size * FALLBACK_ASCENT_COEFFICIENT
        ascent, _descent = self.font.getmetrics()
        return ascent * font_size / _REFERENCE_SIZE

    def _char_widths(self, spans: Iterable["StyledSpan"], font_size: float) -> list[float]:
        widths: list[float] = []
        for span in spans:
            size = span.font_size or font_size
            widths.extend(self.char_width(char, size) for char in span.text)
        return widths

    def _advance(self, char: str) -> float:
        cached = self._advance_cache.get(char)
        if cached is None:
            cached = float(self.font.getlength(char))
            self._advance_cache[char] = cached
        return cached
