"""Tests for output providers."""

import json

import pytest

from typing_svg.animation_pipeline import build_timeline, encode_timeline
from typing_svg.fonts import CharacterWidthOracle
from typing_svg.output import (
    JsonOutputProvider,
    SvgOutputProvider,
    media_type_for_output_format,
    resolve_output_provider,
    supported_output_formats,
    timeline_to_dict,
)
from typing_svg.params import build_params


def create_test_timeline(lines=("Hello", "World"), **overrides):
    return build_timeline(list(lines), build_params(overrides), oracle=CharacterWidthOracle())


def test_resolve_output_provider_by_extension():
    assert isinstance(resolve_output_provider("out.svg"), SvgOutputProvider)
    assert isinstance(resolve_output_provider("OUT.JSON"), JsonOutputProvider)
    assert supported_output_formats() == ("svg", "json")
    assert media_type_for_output_format("svg") == "image/svg+xml"


def test_resolve_output_provider_rejects_unknown_extension():
    with pytest.raises(ValueError, match="Unsupported output format"):
        resolve_output_provider("out.gif")
    with pytest.raises(ValueError, match="Invalid format"):
        media_type_for_output_format("gif")


def test_svg_provider_rejects_non_timeline_payload():
    with pytest.raises(TypeError):
        SvgOutputProvider().encode(["not", "a", "timeline"])


def test_write_requires_path():
    with pytest.raises(ValueError, match="Output path not set"):
        SvgOutputProvider().write(b"<svg/>")


def test_write_saves_encoded_bytes(tmp_path):
    path = tmp_path / "typing.svg"
    provider = SvgOutputProvider(str(path))

    provider.write(provider.encode(create_test_timeline()))

    assert path.read_bytes().startswith(b"<?xml")


def test_json_provider_describes_timeline():
    timeline = create_test_timeline(cursor_style="straight")

    data = json.loads(JsonOutputProvider().encode(timeline))

    assert data == timeline_to_dict(timeline)
    assert data["topology"] == "stacked"
    assert [line["text"] for line in data["lines"]] == ["Hello", "World"]
    assert data["lines"][0]["begin"] == "0s;d1.end+800ms"
    assert data["lines"][0]["fill"] == "remove"
    assert data["cursor"]["glyph"] == "|"
    assert len(data["cursor"]["tracks"]) == 1


def test_encode_timeline_follows_output_extension():
    params = build_params(multi_line=False)

    encoded = encode_timeline(["Hi"], params, "out.json")

    assert json.loads(encoded)["topology"] == "single"
