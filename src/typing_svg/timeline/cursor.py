"""Cursor track synthesis from assembled line timelines."""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Sequence

from .begin_graph import BeginExpression, EndTrigger
from .erase import resolve_erase_mode_name
from .models import (
    CursorPlan,
    CursorTrack,
    FillPolicy,
    IntervalKind,
    LineTimeline,
    Topology,
)

if TYPE_CHECKING:
    from ..params import GlobalParams


CURSOR_GLYPHS: dict[str, str] = {
    "none": "",
    "straight": "|",
    "underlined": "_",
    "block": "█",
    "emoji": "\U0001F525",
    "custom": "\U0001F440",
}

# The cursor only follows text that is typed and erased character by character.
CURSOR_ERASE_MODES = ("line",)


def resolve_cursor_style(style: str | None) -> str:
    if style and style in CURSOR_GLYPHS:
        return style
    return "none"


def cursor_allowed(params: "GlobalParams") -> bool:
    if resolve_cursor_style(params.cursor_style) == "none":
        return False
    return resolve_erase_mode_name(params.erase_mode) in CURSOR_ERASE_MODES


def hide_cursor_when_finished(params: "GlobalParams") -> bool:
    return not params.repeat


@dataclass(frozen=True)
class ActivityInterval:
    """A span of a shared cycle during which the cursor follows one line."""

    start: float
    end: float
    line_index: int
    kind: IntervalKind
    key_times: tuple[float, ...]
    x_positions: tuple[float, ...]


def synthesize_cursor(
    topology: Topology,
    timelines: Sequence[LineTimeline],
    params: "GlobalParams",
) -> tuple[tuple[LineTimeline, ...], CursorPlan | None]:
    """
    Derive cursor tracks from line timelines.

    Args:
        topology: Shape the line timelines were assembled in
        timelines: Assembled line timelines, in index order
        params: Generation parameters

    Returns:
        The line timelines (with per-line cursor fields filled for single and
        replacing topologies) and the cursor plan, or None when no cursor is drawn
    """
    if not timelines or not cursor_allowed(params):
        return tuple(timelines), None

    style = resolve_cursor_style(params.cursor_style)
    if topology is Topology.STACKED:
        track = merged_cursor_track(timelines, params)
        if track is None:
            return tuple(timelines), None
        return tuple(timelines), CursorPlan(style, CURSOR_GLYPHS[style], (track,))

    with_cursor = tuple(_with_line_cursor(timeline, params) for timeline in timelines)
    tracks = tuple(_line_cursor_track(timeline) for timeline in with_cursor)
    hide_after = None
    if hide_cursor_when_finished(params):
        hide_after = BeginExpression((EndTrigger(with_cursor[-1].index),))
    return with_cursor, CursorPlan(style, CURSOR_GLYPHS[style], tracks, hide_after)


def _cursor_fill(timeline: LineTimeline, params: "GlobalParams") -> FillPolicy:
    fill = timeline.fill_policy
    # Frozen between cycles so the cursor does not snap back while waiting to restart.
    if params.repeat:
        fill = FillPolicy.FREEZE
    if hide_cursor_when_finished(params):
        fill = FillPolicy.LOOP
    return fill


def _with_line_cursor(timeline: LineTimeline, params: "GlobalParams") -> LineTimeline:
    """The cursor rides on the tip of the text at each of the line's keyframes."""
    return replace(
        timeline,
        cursor_key_times=timeline.key_times,
        cursor_values=tuple(value.tip_x for value in timeline.values),
        cursor_fill_policy=_cursor_fill(timeline, params),
    )


def _line_cursor_track(timeline: LineTimeline) -> CursorTrack:
    key_times = timeline.cursor_key_times or ()
    fill = timeline.cursor_fill_policy or timeline.fill_policy
    return CursorTrack(
        key_times=key_times,
        x=timeline.cursor_values or (),
        y=tuple(timeline.y for _ in key_times),
        opacity=tuple(1.0 for _ in key_times),
        begin_expression=timeline.begin_expression,
        duration_ms=timeline.total_duration_ms,
        fill_policy=fill,
        opacity_fill_policy=fill,
    )


def activity_intervals(timelines: Sequence[LineTimeline]) -> list[ActivityInterval]:
    """Print and erase intervals of every line, sorted by start then end."""
    intervals: list[ActivityInterval] = []
    for timeline in timelines:
        phases = (
            (IntervalKind.PRINT, timeline.print_window, timeline.cursor_print),
            (IntervalKind.ERASE, timeline.erase_window, timeline.cursor_erase),
        )
        for kind, window, keyframes in phases:
            if window is None or keyframes is None or window.end <= window.start:
                continue
            if not keyframes.key_times or len(keyframes.key_times) != len(keyframes.x_positions):
                continue
            intervals.append(
                ActivityInterval(
                    start=window.start,
                    end=window.end,
                    line_index=timeline.index,
                    kind=kind,
                    key_times=keyframes.key_times,
                    x_positions=keyframes.x_positions,
                )
            )
    intervals.sort(key=lambda interval: (interval.start, interval.end))
    return intervals


class _TrackBuilder:
    """Accumulates cursor points and remembers the last one."""

    def __init__(self, x: float, y: float):
        self.key_times: list[float] = []
        self.x: list[float] = []
        self.y: list[float] = []
        self.opacity: list[float] = []
        self.last_time = 0.0
        self.last_x = x
        self.last_y = y
        self.last_opacity = 0.0

    def push(self, time: float, x: float, y: float, opacity: float) -> None:
        clamped = max(0.0, min(1.0, time))
        self.key_times.append(clamped)
        self.x.append(x)
        self.y.append(y)
        self.opacity.append(opacity)
        self.last_time = clamped
        self.last_x = x
        self.last_y = y
        self.last_opacity = opacity


def merged_cursor_track(
    timelines: Sequence[LineTimeline],
    params: "GlobalParams",
) -> CursorTrack | None:
    """
    Merge every line's activity into one cursor track for the stacked topology.

    The cursor starts hidden, jumps invisibly to each interval's first point,
    follows the interval's detailed keyframes, and disappears in place at the
    end of erase intervals (or of the final print when nothing is erased).
    """
    intervals = activity_intervals(timelines)
    if not intervals:
        return None

    by_index = {timeline.index: timeline for timeline in timelines}
    has_erase = any(interval.kind is IntervalKind.ERASE for interval in intervals)
    print_intervals = [interval for interval in intervals if interval.kind is IntervalKind.PRINT]
    last_print = print_intervals[-1] if print_intervals else None

    first = timelines[0]
    track = _TrackBuilder(first.start_x, first.y)
    track.push(0.0, track.last_x, track.last_y, 0.0)

    for interval in intervals:
        line_y = by_index[interval.line_index].y
        vanishes = interval.kind is IntervalKind.ERASE or (
            interval is last_print and not has_erase
        )

        # Hold the visible cursor in place through the gap instead of gliding.
        if interval.start > track.last_time and track.last_opacity > 0:
            track.push(interval.start, track.last_x, track.last_y, track.last_opacity)

        start_time = interval.key_times[0]
        start_x = interval.x_positions[0]
        if (
            start_x != track.last_x
            or line_y != track.last_y
            or track.last_opacity != 0
        ):
            track.push(start_time, start_x, line_y, 0.0)
        track.push(start_time, start_x, line_y, 1.0)

        last_point = len(interval.key_times) - 1
        for position in range(1, len(interval.key_times)):
            time = interval.key_times[position]
            x = interval.x_positions[position]
            track.push(time, x, line_y, 1.0)
            if position == last_point and vanishes:
                track.push(time, x, line_y, 0.0)

    if track.last_time < 1:
        track.push(1.0, track.last_x, track.last_y, track.last_opacity)

    return CursorTrack(
        key_times=tuple(track.key_times),
        x=tuple(track.x),
        y=tuple(track.y),
        opacity=tuple(track.opacity),
        begin_expression=first.begin_expression,
        duration_ms=first.total_duration_ms,
        fill_policy=_cursor_fill(first, params),
        opacity_fill_policy=FillPolicy.FREEZE,
    )
