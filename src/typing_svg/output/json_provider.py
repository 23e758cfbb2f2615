"""JSON description of a synthesized timeline, for inspection and debugging."""

import json
from typing import Any

from ..timeline.models import CursorPlan, CursorTrack, LineTimeline, TypingTimeline
from .base import OutputProvider


def _line_to_dict(line: LineTimeline, text: str) -> dict[str, Any]:
    data: dict[str, Any] = {
        "index": line.index,
        "text": text,
        "y": line.y,
        "startX": line.start_x,
        "textWidth": line.text_width,
        "begin": line.begin,
        "totalDuration": line.total_duration_ms,
        "fill": line.fill_policy.value,
        "keyTimes": list(line.key_times),
        "widths": [value.width for value in line.values],
    }
    if line.opacity is not None:
        data["opacity"] = {
            "keyTimes": list(line.opacity.key_times),
            "values": list(line.opacity.values),
        }
    if line.print_window is not None:
        data["printWindow"] = [line.print_window.start, line.print_window.end]
    if line.erase_window is not None:
        data["eraseWindow"] = [line.erase_window.start, line.erase_window.end]
    return data


def _track_to_dict(track: CursorTrack) -> dict[str, Any]:
    return {
        "begin": track.begin,
        "duration": track.duration_ms,
        "fill": track.fill_policy.value,
        "opacityFill": track.opacity_fill_policy.value,
        "keyTimes": list(track.key_times),
        "x": list(track.x),
        "y": list(track.y),
        "opacity": list(track.opacity),
    }


def _cursor_to_dict(plan: CursorPlan) -> dict[str, Any]:
    return {
        "style": plan.style,
        "glyph": plan.glyph,
        "tracks": [_track_to_dict(track) for track in plan.tracks],
        "hideAfter": plan.hide_after.serialize() if plan.hide_after else None,
    }


def timeline_to_dict(timeline: TypingTimeline) -> dict[str, Any]:
    """Plain-data view of a timeline with camelCase keys."""
    texts = {line.index: line.text for line in timeline.texts}
    return {
        "topology": timeline.topology.value,
        "lines": [_line_to_dict(line, texts.get(line.index, "")) for line in timeline.lines],
        "cursor": _cursor_to_dict(timeline.cursor) if timeline.cursor else None,
    }


class JsonOutputProvider(OutputProvider):
    """Output provider that dumps the timeline description as JSON."""

    def encode(self, timeline: TypingTimeline) -> bytes:
        return json.dumps(timeline_to_dict(timeline), indent=2, ensure_ascii=False).encode("utf-8")
