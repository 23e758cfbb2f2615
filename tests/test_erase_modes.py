"""Tests for the none, line and fade erase modes."""

import pytest

from typing_svg.fonts import CharacterWidthOracle
from typing_svg.timeline.erase import (
    ERASE_MODES,
    EraseConfig,
    FadeEraseMode,
    LineEraseMode,
    NoneEraseMode,
    StackedEraseLayout,
    get_erase_mode,
    resolve_erase_mode_name,
    supported_erase_mode_names,
)
from typing_svg.timeline.lines import StyledSpan, build_lines, truncate_spans


def make_config(text="Hello", **kwargs) -> EraseConfig:
    oracle = CharacterWidthOracle()
    (line,) = build_lines([text], oracle, font_size=10)
    defaults = dict(
        line=line,
        start_x=100.0,
        y=50.0,
        oracle=oracle,
        font_size=10,
        letter_spacing=0.0,
        total_duration_ms=2000.0,
        print_duration_ms=500.0,
        erase_duration_ms=500.0,
        pause_ms=500.0,
    )
    defaults.update(kwargs)
    return EraseConfig(**defaults)


def assert_well_formed(key_times, values):
    assert key_times[0] == 0
    assert key_times[-1] == 1
    assert len(key_times) == len(values)
    assert all(a <= b for a, b in zip(key_times, key_times[1:]))


def test_registry_is_closed_and_resolves_unknown_names():
    assert supported_erase_mode_names() == ("none", "line", "fade")
    assert resolve_erase_mode_name("bogus") == "line"
    assert resolve_erase_mode_name(None) == "line"
    assert get_erase_mode("fade") is ERASE_MODES["fade"]
    assert get_erase_mode("bogus") is ERASE_MODES["line"]


def test_stacked_layouts():
    assert LineEraseMode.stacked_layout is StackedEraseLayout.REVERSE_SEQUENTIAL
    assert FadeEraseMode.stacked_layout is StackedEraseLayout.SHARED_WINDOW
    assert NoneEraseMode.stacked_layout is StackedEraseLayout.NO_ERASE


def test_line_mode_replacing_erases_one_character_per_step():
    config = make_config()

    result = LineEraseMode().calculate_replacing_mode(config)

    assert_well_formed(result.key_times, result.values)
    widths = [value.width for value in result.values]
    # empty, full at print end, full at erase start, then one step per character
    assert widths[:3] == [0.0, 25.0, 25.0]
    assert widths[3:8] == [20.0, 15.0, 10.0, 5.0, 0.0]
    assert result.key_times[1] == pytest.approx(0.25)
    assert result.key_times[2] == pytest.approx(0.5)
    assert result.key_times[7] == pytest.approx(0.75)
    assert result.values[-1].width == 0
    assert not result.use_fade
    assert result.opacity_track() is None


def test_line_mode_widths_never_grow_while_erasing():
    config = make_config("Wide text \U0001F525", letter_spacing=2.0)

    result = LineEraseMode().calculate_replacing_mode(config)

    erase_widths = [value.width for value in result.values[2:]]
    assert all(a >= b for a, b in zip(erase_widths, erase_widths[1:]))
    assert erase_widths[-1] == 0


def test_line_mode_remeasures_styled_prefixes():
    oracle = CharacterWidthOracle()
    spans = (StyledSpan("ab"), StyledSpan("cd", font_size=30))
    (line,) = build_lines([spans], oracle, font_size=10, letter_spacing=2.0)
    config = make_config(line=line, letter_spacing=2.0)

    result = LineEraseMode().calculate_replacing_mode(config)

    erase_widths = [value.width for value in result.values[2:]]
    expected = [
        oracle.span_width(truncate_spans(spans, remaining), 10, letter_spacing=2.0)
        for remaining in (4, 3, 2, 1, 0)
    ]
    assert erase_widths[:5] == pytest.approx(expected)
    assert expected == pytest.approx([46.0, 29.0, 12.0, 5.0, 0.0])
    assert all(a >= b for a, b in zip(erase_widths, erase_widths[1:]))
    assert erase_widths[-1] == 0


def test_line_mode_multi_line_requires_windows():
    with pytest.raises(ValueError):
        LineEraseMode().calculate_multi_line_mode(make_config())


def test_line_mode_multi_line_uses_given_windows():
    config = make_config(
        "Hi", print_start=0.1, print_end=0.3, erase_start=0.6, erase_end=1.0
    )

    result = LineEraseMode().calculate_multi_line_mode(config)

    assert result.key_times == pytest.approx((0.0, 0.1, 0.3, 0.6, 0.8, 1.0))
    assert [value.width for value in result.values] == [0.0, 0.0, 10.0, 10.0, 5.0, 0.0]


def test_none_mode_replacing_holds_full_width():
    result = NoneEraseMode().calculate_replacing_mode(make_config())

    assert result.key_times == pytest.approx((0.0, 0.25, 1.0))
    assert [value.width for value in result.values] == [0.0, 25.0, 25.0]


def test_none_mode_multi_line_cuts_near_the_end():
    config = make_config(print_start=0.2, print_end=0.5)

    result = NoneEraseMode().calculate_multi_line_mode(config)

    assert_well_formed(result.key_times, result.values)
    assert result.key_times == (0.0, 0.2, 0.5, 0.99, 1.0)
    assert [value.width for value in result.values] == [0.0, 0.0, 25.0, 25.0, 0.0]


def test_none_mode_cut_never_precedes_print_end():
    config = make_config(print_start=0.5, print_end=0.995)

    result = NoneEraseMode().calculate_multi_line_mode(config)

    assert result.key_times[3] == 0.995


def test_fade_mode_keeps_width_and_fades_opacity():
    result = FadeEraseMode().calculate_replacing_mode(make_config())

    assert_well_formed(result.key_times, result.values)
    assert [value.width for value in result.values] == [0.0, 25.0, 25.0, 25.0, 25.0]
    track = result.opacity_track()
    assert track is not None
    assert track.key_times == pytest.approx((0.0, 0.5, 0.75, 1.0))
    assert track.values == (1.0, 1.0, 0.0, 0.0)


def test_fade_mode_multi_line_shares_window():
    config = make_config(print_start=0.0, print_end=0.4, erase_start=0.5, erase_end=0.9)

    result = FadeEraseMode().calculate_multi_line_mode(config)

    assert result.key_times == (0.0, 0.0, 0.4, 0.5, 0.9, 1.0)
    assert (result.fade_start, result.fade_end) == (0.5, 0.9)
