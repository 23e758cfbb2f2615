"""Timeline-based SVG encoder."""

import base64
import logging
from pathlib import Path

from ..constants import ANIMATION_ID_PREFIX, CURSOR_HIDE_DURATION_MS
from ..timeline.lines import Line, StyledSpan
from ..timeline.models import CursorPlan, CursorTrack, FillPolicy, LineTimeline, TypingTimeline
from ._svg_shared import _tl_attr, _tl_num, _tl_paint, _tl_text
from ._svg_tracks import (
    _tl_animate,
    _tl_has_distinct_values,
    _tl_key_times,
    _tl_path_values,
    _tl_scalar_values,
)

logger = logging.getLogger(__name__)

_FONT_FORMATS = {
    ".ttf": ("font/ttf", "truetype"),
    ".otf": ("font/otf", "opentype"),
    ".woff": ("font/woff", "woff"),
    ".woff2": ("font/woff2", "woff2"),
}


def encode_svg_typing_timeline(timeline: TypingTimeline) -> bytes:
    """Encode a typing timeline into an animated SMIL SVG.

    Pipeline:
    1. Emit the root element, embedded font styles and background.
    2. Emit one path/text pair per line, animated through ``d`` (and opacity for fades).
    3. Emit the cursor glyph with its position and visibility tracks.
    """
    params = timeline.params
    width = _tl_num(params.width)
    height = _tl_num(params.height)
    font_css = _tl_font_face_css(params.font_path, params.font_family, params.font_weight)

    parts: list[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
        f'width="{width}" height="{height}" viewBox="0 0 {width} {height}">',
    ]
    if font_css:
        parts.append(f"<defs><style><![CDATA[{font_css}]]></style></defs>")
    parts.append(
        f'<rect width="{width}" height="{height}" fill="{_tl_paint(params.background)}"/>'
    )
    parts.append('<g id="text-container">')

    texts = {line.index: line for line in timeline.texts}
    for line_timeline in timeline.lines:
        parts.extend(_tl_line_elements(line_timeline, texts[line_timeline.index], timeline))

    if timeline.cursor is not None:
        parts.append(_tl_cursor_element(timeline.cursor, timeline))

    parts.append("</g>")
    parts.append("</svg>")
    return "".join(parts).encode("utf-8")


def _tl_font_face_css(font_path: str | None, font_family: str, font_weight: int) -> str:
    """Base64 ``@font-face`` rule for the measured font so rendering matches the widths."""
    if not font_path:
        return ""
    path = Path(font_path)
    mime, css_format = _FONT_FORMATS.get(path.suffix.lower(), ("font/ttf", "truetype"))
    try:
        payload = base64.b64encode(path.read_bytes()).decode("ascii")
    except OSError as exc:
        logger.warning("Could not embed font %s: %s", font_path, exc)
        return ""
    family = font_family.replace("'", "").replace('"', "")
    return (
        f"@font-face{{font-family:'{family}';font-weight:{font_weight};"
        f"src:url(data:{mime};base64,{payload}) format('{css_format}');}}"
    )


def _tl_line_elements(
    line_timeline: LineTimeline,
    line: Line,
    timeline: TypingTimeline,
) -> list[str]:
    params = timeline.params
    index = line_timeline.index
    path_id = f"path{index}"
    begin = line_timeline.begin

    elements = [
        f'<path id="{path_id}">',
        _tl_animate(
            "d",
            element_id=f"{ANIMATION_ID_PREFIX}{index}",
            begin=begin,
            duration_ms=line_timeline.total_duration_ms,
            fill=line_timeline.fill_policy,
            values=_tl_path_values(line_timeline.values),
            key_times=_tl_key_times(line_timeline.key_times),
        ),
        "</path>",
    ]

    letter_spacing = (
        f"{_tl_num(params.letter_spacing)}px" if params.letter_spacing else "normal"
    )
    text_open = (
        f"<text font-family={_tl_attr(params.font_family)} fill=\"{_tl_paint(params.color)}\" "
        f'font-size="{_tl_num(params.font_size)}" font-weight="{params.font_weight}" '
        f'dominant-baseline="auto" x="0%" text-anchor="start" letter-spacing="{letter_spacing}"'
    )
    if line_timeline.opacity is not None:
        text_open += ' opacity="1"'
    elements.append(text_open + ">")

    if line_timeline.opacity is not None:
        elements.append(
            _tl_animate(
                "opacity",
                element_id=f"opacity{index}",
                begin=begin,
                duration_ms=line_timeline.total_duration_ms,
                fill=line_timeline.fill_policy,
                values=_tl_scalar_values(line_timeline.opacity.values),
                key_times=_tl_key_times(line_timeline.opacity.key_times),
            )
        )

    elements.append(f'<textPath xlink:href="#{path_id}">')
    if line.is_styled:
        elements.append(_tl_text_path_content(line.spans, params.color))
    else:
        elements.append(_tl_text(line.text))
    elements.append("</textPath></text>")
    return elements


def _tl_text_path_content(spans: tuple[StyledSpan, ...], default_color: str) -> str:
    """Plain text, or one ``<tspan>`` per styled run."""
    out: list[str] = []
    for span in spans:
        attributes: list[str] = []
        if span.color and span.color != default_color:
            attributes.append(f'fill="{_tl_paint(span.color)}"')
        if span.font_weight:
            attributes.append(f'font-weight="{span.font_weight}"')
        if span.font_size:
            attributes.append(f'font-size="{_tl_num(span.font_size)}"')
        if span.font_family:
            attributes.append(f"font-family={_tl_attr(span.font_family)}")
        text = _tl_text(span.text)
        if attributes:
            out.append(f"<tspan {' '.join(attributes)}>{text}</tspan>")
        else:
            out.append(text)
    return "".join(out)


def _tl_cursor_element(plan: CursorPlan, timeline: TypingTimeline) -> str:
    params = timeline.params
    animations: list[str] = []
    for track in plan.tracks:
        animations.extend(_tl_cursor_track_animations(track))

    if plan.hide_after is not None:
        animations.append(
            '<animate attributeName="opacity" '
            f'begin="{plan.hide_after.serialize()}" dur="{CURSOR_HIDE_DURATION_MS}ms" '
            f'fill="{FillPolicy.FREEZE.value}" values="1;0" keyTimes="0;1"/>'
        )

    return (
        f'<text id="typing-cursor" fill="{_tl_paint(params.color)}" '
        f'font-size="{_tl_num(params.font_size)}" font-weight="{params.font_weight}" '
        'dominant-baseline="auto" text-anchor="start">'
        f"{''.join(animations)}{_tl_text(plan.glyph)}</text>"
    )


def _tl_cursor_track_animations(track: CursorTrack) -> list[str]:
    key_times = _tl_key_times(track.key_times)
    common = {
        "begin": track.begin,
        "duration_ms": track.duration_ms,
        "key_times": key_times,
    }
    animations = [
        _tl_animate("x", fill=track.fill_policy, values=_tl_scalar_values(track.x), **common),
        _tl_animate("y", fill=track.fill_policy, values=_tl_scalar_values(track.y), **common),
    ]
    if _tl_has_distinct_values(track.opacity):
        animations.append(
            _tl_animate(
                "opacity",
                fill=track.opacity_fill_policy,
                values=_tl_scalar_values(track.opacity),
                **common,
            )
        )
    return animations
