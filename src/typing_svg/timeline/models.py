"""Timeline payloads produced by the synthesis engine and consumed by emitters."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .begin_graph import BeginExpression

if TYPE_CHECKING:
    from ..params import GlobalParams
    from .lines import Line


class Topology(str, Enum):
    SINGLE = "single"
    REPLACING = "replacing"
    STACKED = "stacked"


class FillPolicy(str, Enum):
    """SMIL fill behaviour once a timeline finishes."""

    FREEZE = "freeze"
    LOOP = "remove"


class IntervalKind(str, Enum):
    PRINT = "print"
    ERASE = "erase"


@dataclass(frozen=True)
class PathValue:
    """Baseline origin and visible width of a line at one keyframe."""

    x: float
    y: float
    width: float

    @property
    def tip_x(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class OpacityTrack:
    """Opacity keyframes played in parallel with a line's width track."""

    key_times: tuple[float, ...]
    values: tuple[float, ...]


@dataclass(frozen=True)
class Window:
    """A start/end pair expressed as fractions of a timeline's duration."""

    start: float
    end: float


@dataclass(frozen=True)
class CursorKeyframes:
    """Detailed cursor positions for one print or erase phase of a line."""

    key_times: tuple[float, ...]
    x_positions: tuple[float, ...]


@dataclass(frozen=True)
class LineTimeline:
    """Keyframed typing animation of one rendered line."""

    index: int
    y: float
    start_x: float
    text_width: float
    total_duration_ms: float
    begin_expression: BeginExpression
    key_times: tuple[float, ...]
    values: tuple[PathValue, ...]
    fill_policy: FillPolicy
    opacity: OpacityTrack | None = None
    print_window: Window | None = None
    erase_window: Window | None = None
    cursor_print: CursorKeyframes | None = None
    cursor_erase: CursorKeyframes | None = None
    cursor_key_times: tuple[float, ...] | None = None
    cursor_values: tuple[float, ...] | None = None
    cursor_fill_policy: FillPolicy | None = None

    @property
    def begin(self) -> str:
        return self.begin_expression.serialize()

    @property
    def uses_fade(self) -> bool:
        return self.opacity is not None


@dataclass(frozen=True)
class CursorTrack:
    """Position and visibility keyframes of the typing cursor."""

    key_times: tuple[float, ...]
    x: tuple[float, ...]
    y: tuple[float, ...]
    opacity: tuple[float, ...]
    begin_expression: BeginExpression
    duration_ms: float
    fill_policy: FillPolicy
    opacity_fill_policy: FillPolicy

    @property
    def begin(self) -> str:
        return self.begin_expression.serialize()


@dataclass(frozen=True)
class CursorPlan:
    """Cursor glyph plus every track needed to animate it."""

    style: str
    glyph: str
    tracks: tuple[CursorTrack, ...]
    hide_after: BeginExpression | None = None


@dataclass(frozen=True)
class TypingTimeline:
    """Complete synthesis result for one generation request."""

    topology: Topology
    lines: tuple[LineTimeline, ...]
    texts: tuple["Line", ...]
    params: "GlobalParams"
    cursor: CursorPlan | None = None

