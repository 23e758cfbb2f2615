"""Timeline assembly for the single, replacing and stacked topologies."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from .begin_graph import BeginGraph, block_graph, chained_graph
from .durations import char_duration_ms
from .erase import EraseConfig, EraseMode, StackedEraseLayout, get_erase_mode
from .layout import line_y, start_x
from .models import CursorKeyframes, FillPolicy, LineTimeline, PathValue, Topology, Window

if TYPE_CHECKING:
    from ..fonts.metrics import CharacterWidthOracle
    from ..params import GlobalParams
    from .lines import Line

logger = logging.getLogger(__name__)


def select_topology(line_count: int, multi_line: bool) -> Topology:
    """Pick the timeline shape from the multi-line flag and the line count."""
    if multi_line:
        return Topology.STACKED
    if line_count > 1:
        return Topology.REPLACING
    return Topology.SINGLE


@dataclass(frozen=True)
class _Placement:
    start_x: float
    y: float


class TimelineAssembler:
    """Builds one keyframed timeline per line for a generation request."""

    def __init__(
        self,
        params: "GlobalParams",
        oracle: "CharacterWidthOracle",
        base_y: float,
    ):
        """
        Initialize the assembler.

        Args:
            params: Generation parameters
            oracle: Width oracle used to re-measure text while erasing
            base_y: Baseline of the first line
        """
        self.params = params
        self.oracle = oracle
        self.base_y = base_y
        self.erase_mode: EraseMode = get_erase_mode(params.erase_mode)

    def assemble(self, lines: Sequence["Line"]) -> tuple[Topology, tuple[LineTimeline, ...]]:
        if not lines:
            raise ValueError("At least one non-empty line is required")

        topology = select_topology(len(lines), self.params.multi_line)
        logger.debug(
            "Assembling %s timelines for %d lines (erase mode %s)",
            topology.value,
            len(lines),
            self.erase_mode.name,
        )
        if topology is Topology.STACKED:
            return topology, self._stacked(lines)
        return topology, self._slotted(lines, topology)

    def _placement(self, line: "Line") -> _Placement:
        return _Placement(
            start_x=start_x(self.params, line.width),
            y=line_y(self.params, self.base_y, line.index),
        )

    def _config(self, line: "Line", placement: _Placement, total_ms: float, **kwargs) -> EraseConfig:
        return EraseConfig(
            line=line,
            start_x=placement.start_x,
            y=placement.y,
            oracle=self.oracle,
            font_size=self.params.font_size,
            letter_spacing=self.params.letter_spacing,
            total_duration_ms=total_ms,
            **kwargs,
        )

    def _slotted(self, lines: Sequence["Line"], topology: Topology) -> tuple[LineTimeline, ...]:
        """Single and replacing topologies: every line owns the same slot in turn."""
        params = self.params
        last_index = len(lines) - 1
        graph = chained_graph(len(lines), params.repeat, params.pause_ms)

        timelines: list[LineTimeline] = []
        for line in lines:
            placement = self._placement(line)
            print_ms = char_duration_ms(line.char_count, params.print_rate)
            begin = graph.begin_expression(line.index)

            if params.repeat or line.index < last_index:
                erase_ms = char_duration_ms(line.char_count, params.erase_rate)
                total_ms = print_ms + params.pause_ms + erase_ms + params.erase_pause_ms
                config = self._config(
                    line,
                    placement,
                    total_ms,
                    print_duration_ms=print_ms,
                    erase_duration_ms=erase_ms,
                    pause_ms=params.pause_ms,
                )
                if topology is Topology.SINGLE:
                    result = self.erase_mode.calculate_single_line_mode(config)
                else:
                    result = self.erase_mode.calculate_replacing_mode(config)
                timelines.append(
                    LineTimeline(
                        index=line.index,
                        y=placement.y,
                        start_x=placement.start_x,
                        text_width=line.width,
                        total_duration_ms=total_ms,
                        begin_expression=begin,
                        key_times=result.key_times,
                        values=result.values,
                        fill_policy=FillPolicy.LOOP,
                        opacity=result.opacity_track(),
                    )
                )
                continue

            # The last line of a non-repeating sequence types, pauses and stays.
            total_ms = print_ms + params.pause_ms
            full = PathValue(placement.start_x, placement.y, line.width)
            timelines.append(
                LineTimeline(
                    index=line.index,
                    y=placement.y,
                    start_x=placement.start_x,
                    text_width=line.width,
                    total_duration_ms=total_ms,
                    begin_expression=begin,
                    key_times=(0.0, print_ms / total_ms, 1.0),
                    values=(PathValue(placement.start_x, placement.y, 0.0), full, full),
                    fill_policy=FillPolicy.FREEZE,
                )
            )
        return tuple(timelines)

    def _stacked(self, lines: Sequence["Line"]) -> tuple[LineTimeline, ...]:
        """Stacked topology: lines type one below another inside one shared cycle."""
        params = self.params
        pause_ms = params.pause_ms
        print_ms = [char_duration_ms(line.char_count, params.print_rate) for line in lines]
        erase_ms = [char_duration_ms(line.char_count, params.erase_rate) for line in lines]

        offsets: list[float] = []
        elapsed = 0.0
        for duration in print_ms:
            offsets.append(elapsed)
            elapsed += duration + pause_ms
        total_print_ms = offsets[-1] + print_ms[-1]
        total_erase_ms = sum(erase_ms)

        layout = self.erase_mode.stacked_layout if params.repeat else None
        if layout is StackedEraseLayout.REVERSE_SEQUENTIAL:
            total_ms = total_print_ms + total_erase_ms + len(lines) * pause_ms
        elif layout is StackedEraseLayout.SHARED_WINDOW:
            total_ms = total_print_ms + pause_ms + total_erase_ms + params.erase_pause_ms
        elif layout is StackedEraseLayout.NO_ERASE:
            total_ms = total_print_ms + pause_ms
        else:
            total_ms = total_print_ms

        graph = block_graph(len(lines), params.repeat, pause_ms)
        erase_windows = self._stacked_erase_windows(layout, erase_ms, total_print_ms, total_ms)

        timelines: list[LineTimeline] = []
        for line in lines:
            placement = self._placement(line)
            print_window = Window(
                offsets[line.index] / total_ms,
                min(1.0, (offsets[line.index] + print_ms[line.index]) / total_ms),
            )
            erase_window = erase_windows[line.index] if erase_windows else None
            timelines.append(
                self._stacked_line(
                    line, placement, graph, total_ms, layout, print_window, erase_window
                )
            )
        return tuple(timelines)

    def _stacked_erase_windows(
        self,
        layout: StackedEraseLayout | None,
        erase_ms: list[float],
        total_print_ms: float,
        total_ms: float,
    ) -> list[Window] | None:
        pause_ms = self.params.pause_ms
        if layout is StackedEraseLayout.REVERSE_SEQUENTIAL:
            # The last printed line erases first; earlier lines wait for every later one.
            windows: list[Window] = []
            last_index = len(erase_ms) - 1
            for index in range(len(erase_ms)):
                start_ms = total_print_ms + pause_ms
                for later in range(last_index, index, -1):
                    start_ms += erase_ms[later] + pause_ms
                windows.append(
                    Window(start_ms / total_ms, min(1.0, (start_ms + erase_ms[index]) / total_ms))
                )
            return windows
        if layout is StackedEraseLayout.SHARED_WINDOW:
            start_ms = total_print_ms + pause_ms
            shared = Window(start_ms / total_ms, min(1.0, (start_ms + sum(erase_ms)) / total_ms))
            return [shared] * len(erase_ms)
        return None

    def _stacked_line(
        self,
        line: "Line",
        placement: _Placement,
        graph: BeginGraph,
        total_ms: float,
        layout: StackedEraseLayout | None,
        print_window: Window,
        erase_window: Window | None,
    ) -> LineTimeline:
        prefix = self.oracle.prefix_widths(
            line.spans, self.params.font_size, self.params.letter_spacing
        )
        cursor_print = _cursor_keyframes(prefix, placement.start_x, print_window, erasing=False)

        if layout is None:
            empty = PathValue(placement.start_x, placement.y, 0.0)
            full = PathValue(placement.start_x, placement.y, line.width)
            return LineTimeline(
                index=line.index,
                y=placement.y,
                start_x=placement.start_x,
                text_width=line.width,
                total_duration_ms=total_ms,
                begin_expression=graph.begin_expression(line.index),
                key_times=(0.0, print_window.start, print_window.end, 1.0),
                values=(empty, empty, full, full),
                fill_policy=FillPolicy.FREEZE,
                print_window=print_window,
                cursor_print=cursor_print,
            )

        config = self._config(
            line,
            placement,
            total_ms,
            print_start=print_window.start,
            print_end=print_window.end,
            erase_start=erase_window.start if erase_window else None,
            erase_end=erase_window.end if erase_window else None,
        )
        result = self.erase_mode.calculate_multi_line_mode(config)
        cursor_erase = None
        if layout is StackedEraseLayout.REVERSE_SEQUENTIAL and erase_window is not None:
            cursor_erase = _cursor_keyframes(prefix, placement.start_x, erase_window, erasing=True)

        return LineTimeline(
            index=line.index,
            y=placement.y,
            start_x=placement.start_x,
            text_width=line.width,
            total_duration_ms=total_ms,
            begin_expression=graph.begin_expression(line.index),
            key_times=result.key_times,
            values=result.values,
            fill_policy=FillPolicy.LOOP,
            opacity=result.opacity_track(),
            print_window=print_window,
            erase_window=erase_window,
            cursor_print=cursor_print,
            cursor_erase=cursor_erase,
        )


def _cursor_keyframes(
    prefix_widths: list[float],
    origin_x: float,
    window: Window,
    erasing: bool,
) -> CursorKeyframes:
    """One cursor keyframe per character boundary across ``window``."""
    char_count = len(prefix_widths) - 1
    key_times: list[float] = []
    x_positions: list[float] = []
    for step in range(char_count + 1):
        progress = step / char_count if char_count else 0.0
        position = char_count - step if erasing else step
        key_times.append(min(1.0, window.start + (window.end - window.start) * progress))
        x_positions.append(origin_x + prefix_widths[position])
    return CursorKeyframes(key_times=tuple(key_times), x_positions=tuple(x_positions))


def assemble_timelines(
    lines: Sequence["Line"],
    params: "GlobalParams",
    oracle: "CharacterWidthOracle",
    base_y: float,
) -> tuple[Topology, tuple[LineTimeline, ...]]:
    """Assemble per-line timelines for ``lines`` under ``params``."""
    return TimelineAssembler(params, oracle, base_y).assemble(lines)
