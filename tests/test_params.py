"""Tests for parameter defaults and query-string conversion."""

import pytest

from typing_svg.animation_pipeline import build_timeline
from typing_svg.fonts import CharacterWidthOracle
from typing_svg.params import (
    DEFAULT_PARAMS,
    GlobalParams,
    build_params,
    parse_letter_spacing,
    parse_query_params,
    split_lines,
)


def test_defaults():
    params = GlobalParams()

    assert params.print_rate == 10
    assert params.erase_rate == 10
    assert params.pause_ms == 800
    assert params.erase_pause_ms == 800
    assert params.repeat is True
    assert params.multi_line is True
    assert params.erase_mode == "line"
    assert params.cursor_style == "none"
    assert (params.width, params.height) == (800, 100)
    assert params.font_size == 48
    assert DEFAULT_PARAMS["lines"] == ["Your text here"]
    assert DEFAULT_PARAMS["color"] == "#6F08FF"


def test_split_lines_drops_blank_entries():
    assert split_lines("Hello; ;World;") == ["Hello", "World"]
    assert split_lines("") == []
    assert split_lines(None) == []


def test_parse_query_params_handles_aliases():
    overrides = parse_query_params(
        {
            "lines": "One;Two",
            "duration": "20",
            "pause": "1000",
            "font": "32",
            "vAlign": "top",
            "hAlign": "left",
            "multiLine": "false",
            "repeat": "0",
            "eraseMode": "fade",
            "cursorStyle": "block",
            "fontWeight": "600",
            "unknown": "ignored",
        }
    )

    assert overrides == {
        "lines": ["One", "Two"],
        "print_rate": 20.0,
        "pause_ms": 1000.0,
        "font_size": 32.0,
        "vertical_align": "top",
        "horizontal_align": "left",
        "multi_line": False,
        "repeat": False,
        "erase_mode": "fade",
        "cursor_style": "block",
        "font_weight": 600,
    }


def test_center_flag_overrides_alignment():
    overrides = parse_query_params({"hAlign": "left", "center": "true"})

    assert overrides["horizontal_align"] == "center"
    assert overrides["vertical_align"] == "middle"


def test_unparseable_numbers_are_ignored():
    assert parse_query_params({"width": "wide", "fontWeight": "bold"}) == {}


def test_build_params_normalizes_values():
    params = build_params(
        {
            "lines": ["ignored"],
            "print_rate": 0,
            "erase_rate": -5,
            "horizontal_align": "sideways",
            "vertical_align": "up",
            "color": "FF0000",
            "background": "transparent",
            "letter_spacing": "0.5em",
            "font_size": 20,
        }
    )

    assert params.print_rate == 1
    assert params.erase_rate == 1
    assert params.horizontal_align == "center"
    assert params.vertical_align == "middle"
    assert params.color == "#FF0000"
    assert params.background == "transparent"
    assert params.letter_spacing == 10


def test_post_erase_pause_overrides_pause():
    params = build_params(pause_ms=500, post_erase_pause_ms=0)

    assert params.erase_pause_ms == 0


def test_negative_pauses_are_clamped_to_zero():
    params = build_params(parse_query_params({"pause": "-100", "postErasePause": "-500"}))

    assert params.pause_ms == 0
    assert params.post_erase_pause_ms == 0
    assert params.erase_pause_ms == 0
    assert build_params().post_erase_pause_ms is None


def test_negative_post_erase_pause_keeps_key_times_in_order():
    query = {"lines": "Hi", "multiLine": "false", "eraseMode": "fade", "postErasePause": "-500"}
    overrides = parse_query_params(query)

    timeline = build_timeline(overrides["lines"], build_params(overrides), CharacterWidthOracle())

    (line,) = timeline.lines
    for key_times in (line.key_times, line.opacity.key_times):
        assert key_times[-1] == 1
        assert all(a <= b <= 1 for a, b in zip(key_times, key_times[1:]))


def test_defaults_are_keyed_by_query_names():
    assert DEFAULT_PARAMS["printSpeed"] == 10
    assert DEFAULT_PARAMS["delayBetweenLines"] == 800
    assert DEFAULT_PARAMS["eraseMode"] == "line"
    assert DEFAULT_PARAMS["multiLine"] is True
    assert "print_rate" not in DEFAULT_PARAMS
    assert "font_path" not in DEFAULT_PARAMS


def test_defaults_feed_back_into_query_parsing():
    query = {
        key: str(value)
        for key, value in DEFAULT_PARAMS.items()
        if key != "lines" and value is not None
    }

    assert build_params(parse_query_params(query)) == GlobalParams()


@pytest.mark.parametrize(
    "value,expected",
    [("normal", 0.0), ("4px", 4.0), ("0.25em", 5.0), ("3", 3.0), (2, 2.0), ("wat", 0.0)],
)
def test_parse_letter_spacing(value, expected):
    assert parse_letter_spacing(value, 20) == expected
