"""Line mode: text is erased one character at a time from the right."""

from ..models import PathValue
from .base_mode import EraseConfig, EraseMode, EraseResult, StackedEraseLayout


def char_by_char_erase(
    config: EraseConfig,
    erase_start: float,
    erase_end: float,
    print_end: float,
    print_start: float | None = None,
) -> EraseResult:
    """Build width keyframes that remove one character per step.

    Anchors come first (empty at 0, optional empty at ``print_start``, full at
    ``print_end`` and ``erase_start``), then one keyframe per removed character
    with the surviving prefix measured again, then a closing empty point at 1.
    """
    char_count = config.line.char_count
    key_times: list[float] = [0.0]
    values: list[PathValue] = [config.path(0.0)]

    if print_start is not None:
        key_times.append(print_start)
        values.append(config.path(0.0))
    key_times.append(print_end)
    values.append(config.path(config.text_width))

    key_times.append(erase_start)
    values.append(config.path(config.text_width))

    for remaining in range(char_count - 1, -1, -1):
        progress = (char_count - remaining) / char_count
        key_times.append(min(1.0, erase_start + (erase_end - erase_start) * progress))
        values.append(config.path(config.remaining_width(remaining)))

    if key_times[-1] < 1:
        key_times.append(1.0)
        values.append(config.path(0.0))

    return EraseResult(key_times=tuple(key_times), values=tuple(values))


class LineEraseMode(EraseMode):
    """Shrinks the visible width to zero, re-measuring what is left after each step."""

    name = "line"
    stacked_layout = StackedEraseLayout.REVERSE_SEQUENTIAL

    def calculate_replacing_mode(self, config: EraseConfig) -> EraseResult:
        erase_start, erase_end = config.slot_erase_window()
        return char_by_char_erase(
            config,
            erase_start=erase_start,
            erase_end=erase_end,
            print_end=config.slot_print_end(),
        )

    def calculate_multi_line_mode(self, config: EraseConfig) -> EraseResult:
        if config.erase_start is None or config.erase_end is None or config.print_end is None:
            raise ValueError("Stacked line erase requires print and erase windows")
        return char_by_char_erase(
            config,
            erase_start=config.erase_start,
            erase_end=config.erase_end,
            print_end=config.print_end,
            print_start=config.print_start or 0.0,
        )
