"""Base erase mode interface shared by the none, line and fade modes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..lines import truncate_spans
from ..models import OpacityTrack, PathValue

if TYPE_CHECKING:
    from ...fonts.metrics import CharacterWidthOracle
    from ..lines import Line


class StackedEraseLayout(str, Enum):
    """How a mode schedules erasing when lines are stacked."""

    REVERSE_SEQUENTIAL = "reverse_sequential"
    SHARED_WINDOW = "shared_window"
    NO_ERASE = "no_erase"


@dataclass(frozen=True)
class EraseConfig:
    """Timing and geometry of one line handed to an erase mode.

    Durations are in milliseconds. Window fractions (``print_start`` and the
    ``erase_*`` pair) are already normalized to ``total_duration_ms`` and are
    only set by the stacked assembler.
    """

    line: "Line"
    start_x: float
    y: float
    oracle: "CharacterWidthOracle"
    font_size: float
    letter_spacing: float
    total_duration_ms: float
    print_duration_ms: float = 0.0
    erase_duration_ms: float = 0.0
    pause_ms: float = 0.0
    print_start: float | None = None
    print_end: float | None = None
    erase_start: float | None = None
    erase_end: float | None = None

    @property
    def text_width(self) -> float:
        return self.line.width

    def path(self, width: float) -> PathValue:
        return PathValue(self.start_x, self.y, width)

    def remaining_width(self, char_count: int) -> float:
        """Measure the first ``char_count`` characters that survive erasing."""
        if char_count <= 0:
            return 0.0
        surviving = truncate_spans(self.line.spans, char_count)
        return self.oracle.span_width(surviving, self.font_size, self.letter_spacing)

    def slot_print_end(self) -> float:
        return self.print_duration_ms / self.total_duration_ms

    def slot_erase_window(self) -> tuple[float, float]:
        """Erase window of a line occupying the slot alone: print, pause, erase."""
        start = self.print_duration_ms + self.pause_ms
        end = start + self.erase_duration_ms
        return start / self.total_duration_ms, end / self.total_duration_ms


@dataclass(frozen=True)
class EraseResult:
    """Width keyframes of one line plus the optional fade window."""

    key_times: tuple[float, ...]
    values: tuple[PathValue, ...]
    use_fade: bool = False
    fade_start: float = 0.0
    fade_end: float = 0.0

    def opacity_track(self) -> OpacityTrack | None:
        if not self.use_fade:
            return None
        return OpacityTrack(
            key_times=(0.0, self.fade_start, self.fade_end, 1.0),
            values=(1.0, 1.0, 0.0, 0.0),
        )


class EraseMode(ABC):
    """Abstract base class for text erase modes."""

    name: str
    stacked_layout: StackedEraseLayout

    @abstractmethod
    def calculate_replacing_mode(self, config: EraseConfig) -> EraseResult:
        """
        Keyframes for a line that owns the slot until the next line replaces it.

        Args:
            config: Line geometry with print, pause and erase durations

        Returns:
            Width keyframes covering print, erase and the trailing pause
        """
        raise NotImplementedError

    @abstractmethod
    def calculate_multi_line_mode(self, config: EraseConfig) -> EraseResult:
        """
        Keyframes for a line stacked with others in one shared cycle.

        Args:
            config: Line geometry with print and erase windows as fractions

        Returns:
            Width keyframes over the whole shared cycle
        """
        raise NotImplementedError

    def calculate_single_line_mode(self, config: EraseConfig) -> EraseResult:
        """Keyframes for the only line; it owns the slot exactly like a replacing line."""
        return self.calculate_replacing_mode(config)
