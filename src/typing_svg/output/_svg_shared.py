"""Shared helpers for SVG output encoding."""

from functools import lru_cache
from xml.sax.saxutils import escape, quoteattr


def _short_hex(color: str) -> str:
    lower = color.lower()
    if len(lower) == 7 and lower[1] == lower[2] and lower[3] == lower[4] and lower[5] == lower[6]:
        return f"#{lower[1]}{lower[3]}{lower[5]}"
    return lower


def _tl_paint(color: str) -> str:
    """SVG paint value for a configured color; ``transparent`` paints nothing."""
    if color.lower() == "transparent":
        return "none"
    return _short_hex(color)


def _tl_compact(text: str) -> str:
    if text.startswith("0.") and len(text) > 2:
        text = text[1:]
    if text.startswith("-0.") and len(text) > 3:
        text = "-" + text[2:]
    return text or "0"


@lru_cache(maxsize=8192)
def _tl_num(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    return _tl_compact(f"{value:.3f}".rstrip("0").rstrip("."))


@lru_cache(maxsize=8192)
def _tl_num_key_time(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    return _tl_compact(f"{value:.5f}".rstrip("0").rstrip("."))


def _tl_ms(value: float) -> str:
    return f"{_tl_num(value)}ms"


def _tl_text(value: str) -> str:
    return escape(value)


def _tl_attr(value: str) -> str:
    """Quoted attribute value, escaping quotes and markup characters."""
    return quoteattr(value)
