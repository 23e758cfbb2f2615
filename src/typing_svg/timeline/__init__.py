"""Typing animation timeline synthesis."""

from .assembler import TimelineAssembler, assemble_timelines, select_topology
from .begin_graph import BeginExpression, BeginGraph, EndTrigger, LoadTrigger
from .cursor import CURSOR_GLYPHS, cursor_allowed, resolve_cursor_style, synthesize_cursor
from .durations import char_duration_ms, ms_per_char
from .erase import get_erase_mode, resolve_erase_mode_name, supported_erase_mode_names
from .lines import Line, LineSource, StyledSpan, build_lines
from .models import (
    CursorPlan,
    CursorTrack,
    FillPolicy,
    LineTimeline,
    OpacityTrack,
    PathValue,
    Topology,
    TypingTimeline,
)

__all__ = [
    "TimelineAssembler",
    "assemble_timelines",
    "select_topology",
    "BeginExpression",
    "BeginGraph",
    "EndTrigger",
    "LoadTrigger",
    "CURSOR_GLYPHS",
    "cursor_allowed",
    "resolve_cursor_style",
    "synthesize_cursor",
    "char_duration_ms",
    "ms_per_char",
    "get_erase_mode",
    "resolve_erase_mode_name",
    "supported_erase_mode_names",
    "Line",
    "LineSource",
    "StyledSpan",
    "build_lines",
    "CursorPlan",
    "CursorTrack",
    "FillPolicy",
    "LineTimeline",
    "OpacityTrack",
    "PathValue",
    "Topology",
    "TypingTimeline",
]
