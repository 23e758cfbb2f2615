"""SVG output provider."""

from ..timeline.models import TypingTimeline
from ._svg_timeline_encoder import encode_svg_typing_timeline
from .base import OutputProvider


class SvgOutputProvider(OutputProvider):
    """Output provider for animated SMIL SVG format."""

    def encode(self, timeline: TypingTimeline) -> bytes:
        if not isinstance(timeline, TypingTimeline):
            raise TypeError(
                f"SVG output only supports typing timelines (got {type(timeline).__name__})"
            )
        return encode_svg_typing_timeline(timeline)
