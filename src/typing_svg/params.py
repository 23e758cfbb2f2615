"""Generation parameters, defaults and request-boundary conversion."""

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from .constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_COLOR,
    DEFAULT_ERASE_RATE,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_FONT_WEIGHT,
    DEFAULT_HEIGHT,
    DEFAULT_LETTER_SPACING,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_PADDING_X,
    DEFAULT_PADDING_Y,
    DEFAULT_PAUSE_MS,
    DEFAULT_PLACEHOLDER_LINE,
    DEFAULT_PRINT_RATE,
    DEFAULT_WIDTH,
    MIN_RATE,
)

logger = logging.getLogger(__name__)

HORIZONTAL_ALIGNS = ("left", "center", "right")
VERTICAL_ALIGNS = ("top", "middle", "bottom")


@dataclass(frozen=True)
class GlobalParams:
    """Immutable configuration for one generation request."""

    print_rate: float = DEFAULT_PRINT_RATE
    erase_rate: float = DEFAULT_ERASE_RATE
    pause_ms: float = DEFAULT_PAUSE_MS
    post_erase_pause_ms: float | None = None
    repeat: bool = True
    multi_line: bool = True
    erase_mode: str = "line"
    cursor_style: str = "none"
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    padding_x: float = DEFAULT_PADDING_X
    padding_y: float = DEFAULT_PADDING_Y
    horizontal_align: str = "center"
    vertical_align: str = "middle"
    font_size: float = DEFAULT_FONT_SIZE
    line_height: float = DEFAULT_LINE_HEIGHT
    letter_spacing: float = DEFAULT_LETTER_SPACING
    color: str = DEFAULT_COLOR
    background: str = DEFAULT_BACKGROUND
    font_family: str = DEFAULT_FONT_FAMILY
    font_weight: int = DEFAULT_FONT_WEIGHT
    font_path: str | None = None

    @property
    def erase_pause_ms(self) -> float:
        """Pause held after an erase completes, before the slot is reused."""
        if self.post_erase_pause_ms is None:
            return self.pause_ms
        return self.post_erase_pause_ms


_FIELD_NAMES = {field.name for field in fields(GlobalParams)}

_BOOL_FIELDS = {"repeat", "multi_line"}
_FLOAT_FIELDS = {
    "print_rate",
    "erase_rate",
    "pause_ms",
    "post_erase_pause_ms",
    "width",
    "height",
    "padding_x",
    "padding_y",
    "font_size",
    "line_height",
}
_INT_FIELDS = {"font_weight"}

# Query-string keys, aliases included, mapped to parameter names
QUERY_PARAM_NAMES: dict[str, str] = {
    "printSpeed": "print_rate",
    "duration": "print_rate",
    "eraseSpeed": "erase_rate",
    "delayBetweenLines": "pause_ms",
    "pause": "pause_ms",
    "postErasePause": "post_erase_pause_ms",
    "fontSize": "font_size",
    "font": "font_size",
    "fontWeight": "font_weight",
    "fontFamily": "font_family",
    "lineHeight": "line_height",
    "letterSpacing": "letter_spacing",
    "color": "color",
    "background": "background",
    "width": "width",
    "height": "height",
    "paddingX": "padding_x",
    "paddingY": "padding_y",
    "verticalAlign": "vertical_align",
    "vAlign": "vertical_align",
    "horizontalAlign": "horizontal_align",
    "hAlign": "horizontal_align",
    "eraseMode": "erase_mode",
    "cursorStyle": "cursor_style",
    "multiLine": "multi_line",
    "repeat": "repeat",
}

# First query key listed for each parameter
_QUERY_KEYS: dict[str, str] = {
    name: key for key, name in reversed(QUERY_PARAM_NAMES.items())
}

# Documented defaults under their query keys, as served to clients
DEFAULT_PARAMS: dict[str, Any] = {
    "lines": [DEFAULT_PLACEHOLDER_LINE],
    **{
        _QUERY_KEYS[name]: value
        for name, value in asdict(GlobalParams()).items()
        if name in _QUERY_KEYS
    },
}


def split_lines(value: str | None) -> list[str]:
    """Split a ``;``-separated lines string, dropping blank entries."""
    if not value:
        return []
    return [line.strip() for line in value.split(";") if line.strip()]


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def parse_letter_spacing(value: Any, font_size: float) -> float:
    """Convert ``normal``, ``4px``, ``0.1em`` or a bare number to pixels."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value or "").strip().lower()
    if not text or text == "normal":
        return 0.0
    try:
        if text.endswith("px"):
            return float(text[:-2])
        if text.endswith("em"):
            return float(text[:-2]) * font_size
        return float(text)
    except ValueError:
        return 0.0


def normalize_color(value: str) -> str:
    if value == "transparent" or value.startswith("#"):
        return value
    return f"#{value}"


def parse_query_params(query: Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert raw query-string values into parameter overrides.

    Args:
        query: Mapping of query keys (camelCase, aliases allowed) to string values

    Returns:
        Overrides keyed by ``GlobalParams`` field name, plus ``lines`` when present
    """
    overrides: dict[str, Any] = {}
    lines = split_lines(query.get("lines"))
    if lines:
        overrides["lines"] = lines

    for key, name in QUERY_PARAM_NAMES.items():
        if key not in query or query[key] is None:
            continue
        value = _convert(name, query[key])
        if value is not None:
            overrides[name] = value

    if parse_bool(query.get("center", False)):
        overrides["horizontal_align"] = "center"
        overrides["vertical_align"] = "middle"
    return overrides


def build_params(overrides: Mapping[str, Any] | None = None, **kwargs: Any) -> GlobalParams:
    """
    Apply defaults to overrides and normalize them into ``GlobalParams``.

    Rates are clamped to at least one character per second and pauses to zero
    or more. Unknown alignments fall back to center/middle and colors gain a
    leading ``#``. Keys that are not parameter names (such as ``lines``) are
    ignored.
    """
    values = {**(overrides or {}), **kwargs}
    known = {key: value for key, value in values.items() if key in _FIELD_NAMES}
    params = replace(GlobalParams(), **{
        key: value for key, value in known.items() if key != "letter_spacing"
    })

    font_size = params.font_size if params.font_size > 0 else DEFAULT_FONT_SIZE
    horizontal_align = params.horizontal_align
    if horizontal_align not in HORIZONTAL_ALIGNS:
        horizontal_align = "center"
    vertical_align = params.vertical_align
    if vertical_align not in VERTICAL_ALIGNS:
        vertical_align = "middle"

    return replace(
        params,
        print_rate=_clamp_rate(params.print_rate),
        erase_rate=_clamp_rate(params.erase_rate),
        pause_ms=max(0.0, float(params.pause_ms)),
        post_erase_pause_ms=(
            None
            if params.post_erase_pause_ms is None
            else max(0.0, float(params.post_erase_pause_ms))
        ),
        font_size=font_size,
        horizontal_align=horizontal_align,
        vertical_align=vertical_align,
        letter_spacing=parse_letter_spacing(known.get("letter_spacing", 0.0), font_size),
        color=normalize_color(params.color),
        background=normalize_color(params.background),
    )


def _clamp_rate(rate: float) -> float:
    if rate < MIN_RATE:
        logger.debug("Clamping rate %s to %s chars/s", rate, MIN_RATE)
        return MIN_RATE
    return float(rate)


def _convert(name: str, raw: Any) -> Any:
    if name in _BOOL_FIELDS:
        return parse_bool(raw)
    if name in _FLOAT_FIELDS:
        try:
            return float(raw)
        except (TypeError, ValueError):
            return None
    if name in _INT_FIELDS:
        try:
            return int(float(raw))
        except (TypeError, ValueError):
            return None
    return str(raw)
