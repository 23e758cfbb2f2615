"""Line placement inside the canvas."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..fonts.metrics import CharacterWidthOracle
    from ..params import GlobalParams


def start_y(params: "GlobalParams", line_count: int, oracle: "CharacterWidthOracle") -> float:
    """Baseline of the first line for the configured vertical alignment."""
    text_height = (
        line_count * params.font_size * params.line_height
        if params.multi_line
        else params.font_size
    )
    if params.vertical_align == "top":
        # Baseline sits one ascent below the padding so glyph tops are not clipped.
        return params.padding_y + oracle.ascent(params.font_size)
    if params.vertical_align == "bottom":
        return params.height - text_height + params.font_size / 2
    return (params.height - text_height) / 2 + params.font_size


def line_y(params: "GlobalParams", base_y: float, index: int) -> float:
    """Stacked lines move down by one line height each; replacing lines share a slot."""
    if not params.multi_line:
        return base_y
    return base_y + index * params.font_size * params.line_height


def start_x(params: "GlobalParams", text_width: float) -> float:
    if params.horizontal_align == "left":
        return params.padding_x
    if params.horizontal_align == "right":
        return params.width - params.padding_x - text_width
    return (params.width - text_width) / 2
