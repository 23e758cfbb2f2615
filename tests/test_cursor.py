"""Tests for cursor track synthesis."""

import pytest

from typing_svg.animation_pipeline import build_timeline
from typing_svg.fonts import CharacterWidthOracle
from typing_svg.params import build_params
from typing_svg.timeline.cursor import (
    CURSOR_GLYPHS,
    activity_intervals,
    cursor_allowed,
    resolve_cursor_style,
)
from typing_svg.timeline.models import FillPolicy, IntervalKind


def synthesize(lines, **overrides):
    return build_timeline(lines, build_params(overrides), oracle=CharacterWidthOracle())


def vanish_times(track):
    """Key times where the cursor turns invisible in place and stays hidden."""
    times = track.key_times
    vanished = []
    for i in range(len(times) - 1):
        hides = (
            times[i] == times[i + 1]
            and track.opacity[i] == 1
            and track.opacity[i + 1] == 0
            and track.x[i] == track.x[i + 1]
        )
        reappears = i + 2 < len(times) and times[i + 2] == times[i] and track.opacity[i + 2] == 1
        if hides and not reappears:
            vanished.append(times[i])
    return vanished


def test_cursor_styles():
    assert CURSOR_GLYPHS["straight"] == "|"
    assert CURSOR_GLYPHS["block"] == "█"
    assert resolve_cursor_style("bogus") == "none"
    assert resolve_cursor_style(None) == "none"


def test_cursor_only_follows_line_erase():
    assert cursor_allowed(build_params(cursor_style="straight"))
    assert cursor_allowed(build_params(cursor_style="straight", erase_mode="bogus"))
    assert not cursor_allowed(build_params(cursor_style="straight", erase_mode="fade"))
    assert not cursor_allowed(build_params(cursor_style="straight", erase_mode="none"))
    assert not cursor_allowed(build_params(cursor_style="none"))


@pytest.mark.parametrize("multi_line", [True, False])
def test_no_cursor_plan_when_disallowed(multi_line):
    timeline = synthesize(["Hi", "There"], cursor_style="emoji", erase_mode="fade", multi_line=multi_line)

    assert timeline.cursor is None


def test_replacing_cursor_rides_the_text_tip():
    timeline = synthesize(["Hi", "Bye"], multi_line=False, cursor_style="straight")

    plan = timeline.cursor
    assert plan.glyph == "|"
    assert len(plan.tracks) == 2
    assert plan.hide_after is None
    for line, track in zip(timeline.lines, plan.tracks):
        assert line.cursor_key_times == line.key_times
        assert line.cursor_values == tuple(value.x + value.width for value in line.values)
        assert track.x == line.cursor_values
        assert set(track.y) == {line.y}
        assert track.begin == line.begin
        assert track.duration_ms == line.total_duration_ms
        assert track.fill_policy is FillPolicy.FREEZE


def test_replacing_cursor_hides_after_last_line_without_repeat():
    timeline = synthesize(["Hi", "Bye"], multi_line=False, repeat=False, cursor_style="block")

    plan = timeline.cursor
    assert plan.hide_after.serialize() == "d1.end"
    assert all(track.fill_policy is FillPolicy.LOOP for track in plan.tracks)
    assert [line.cursor_fill_policy for line in timeline.lines] == [FillPolicy.LOOP] * 2


def test_stacked_cursor_is_one_merged_track():
    timeline = synthesize(["Hi", "There"], multi_line=True, cursor_style="straight")

    (track,) = timeline.cursor.tracks
    first = timeline.lines[0]
    assert track.opacity[0] == 0
    assert track.key_times[0] == 0
    assert track.key_times[-1] == 1
    assert len(track.key_times) == len(track.x) == len(track.y) == len(track.opacity)
    assert all(a <= b for a, b in zip(track.key_times, track.key_times[1:]))
    assert track.begin == first.begin
    assert track.duration_ms == first.total_duration_ms
    assert track.fill_policy is FillPolicy.FREEZE
    assert track.opacity_fill_policy is FillPolicy.FREEZE
    assert timeline.cursor.hide_after is None


def test_stacked_cursor_vanishes_at_each_erase_end():
    timeline = synthesize(["Hi", "There"], multi_line=True, cursor_style="straight")

    (track,) = timeline.cursor.tracks
    erase_ends = sorted(line.erase_window.end for line in timeline.lines)
    assert vanish_times(track) == pytest.approx(erase_ends)
    # the cursor leaves each line at its start once the line is erased
    assert track.x[-1] == timeline.lines[0].start_x


def test_stacked_cursor_without_repeat_vanishes_after_last_print():
    timeline = synthesize(["Hi", "There"], multi_line=True, repeat=False, cursor_style="straight")

    (track,) = timeline.cursor.tracks
    last = timeline.lines[-1]
    assert vanish_times(track) == pytest.approx([last.print_window.end])
    assert track.opacity[-1] == 0
    assert track.x[-1] == pytest.approx(last.start_x + last.text_width)


def test_stacked_cursor_teleports_invisibly_between_lines():
    timeline = synthesize(["Hi", "There"], multi_line=True, cursor_style="straight")

    (track,) = timeline.cursor.tracks
    second = timeline.lines[1]
    start = second.print_window.start
    points = [
        (track.x[i], track.y[i], track.opacity[i])
        for i, time in enumerate(track.key_times)
        if time == pytest.approx(start)
    ]
    # hold at the end of the first line, jump while hidden, then appear
    assert points[-2] == (second.start_x, second.y, 0.0)
    assert points[-1] == (second.start_x, second.y, 1.0)


def test_activity_intervals_are_sorted():
    timeline = synthesize(["Hi", "There", "You"], multi_line=True, cursor_style="straight")

    intervals = activity_intervals(timeline.lines)
    starts = [(interval.start, interval.end) for interval in intervals]
    assert starts == sorted(starts)
    erase_order = [i.line_index for i in intervals if i.kind is IntervalKind.ERASE]
    assert erase_order == [2, 1, 0]
