"""Formatting of keyframe tracks into SMIL ``<animate>`` elements."""

from typing import Sequence

from ..timeline.models import FillPolicy, PathValue
from ._svg_shared import _tl_ms, _tl_num, _tl_num_key_time

_TrackValue = float | str


def _tl_key_times(key_times: Sequence[float]) -> str:
    return ";".join(_tl_num_key_time(time) for time in key_times)


def _tl_scalar_values(values: Sequence[float]) -> str:
    return ";".join(_tl_num(value) for value in values)


def _tl_path_value(value: PathValue) -> str:
    """Horizontal baseline segment; the text path shows only this much of the line."""
    return f"m{_tl_num(value.x)},{_tl_num(value.y)} h{_tl_num(value.width)}"


def _tl_path_values(values: Sequence[PathValue]) -> str:
    return " ; ".join(_tl_path_value(value) for value in values)


def _tl_has_distinct_values(values: Sequence[_TrackValue]) -> bool:
    if not values:
        return False
    first = values[0]
    return any(value != first for value in values[1:])


def _tl_animate(
    attribute: str,
    *,
    begin: str,
    duration_ms: float,
    fill: FillPolicy,
    values: str,
    key_times: str,
    element_id: str | None = None,
) -> str:
    id_attr = f' id="{element_id}"' if element_id else ""
    return (
        f'<animate{id_attr} attributeName="{attribute}" begin="{begin}" '
        f'dur="{_tl_ms(duration_ms)}" fill="{fill.value}" '
        f'values="{values}" keyTimes="{key_times}"/>'
    )
