"""Erase mode implementations and their registry."""

from .base_mode import EraseConfig, EraseMode, EraseResult, StackedEraseLayout
from .fade_mode import FadeEraseMode
from .line_mode import LineEraseMode, char_by_char_erase
from .none_mode import NoneEraseMode

DEFAULT_ERASE_MODE_NAME = "line"
ERASE_MODES: dict[str, EraseMode] = {
    "none": NoneEraseMode(),
    "line": LineEraseMode(),
    "fade": FadeEraseMode(),
}


def supported_erase_mode_names() -> tuple[str, ...]:
    """Return supported erase mode names in deterministic order."""
    return tuple(ERASE_MODES.keys())


def resolve_erase_mode_name(name: str | None) -> str:
    """Map any name to a registered mode; unknown names mean ``line``."""
    if name and name in ERASE_MODES:
        return name
    return DEFAULT_ERASE_MODE_NAME


def get_erase_mode(name: str | None) -> EraseMode:
    """Return the shared stateless instance for ``name``."""
    return ERASE_MODES[resolve_erase_mode_name(name)]


__all__ = [
    "EraseConfig",
    "EraseMode",
    "EraseResult",
    "StackedEraseLayout",
    "FadeEraseMode",
    "LineEraseMode",
    "NoneEraseMode",
    "char_by_char_erase",
    "DEFAULT_ERASE_MODE_NAME",
    "ERASE_MODES",
    "supported_erase_mode_names",
    "resolve_erase_mode_name",
    "get_erase_mode",
]
