"""None mode: text stays on screen once typed."""

from ...constants import STACKED_NO_ERASE_CUT
from .base_mode import EraseConfig, EraseMode, EraseResult, StackedEraseLayout


class NoneEraseMode(EraseMode):
    """Holds the full line; stacked lines vanish in one near-instant cut."""

    name = "none"
    stacked_layout = StackedEraseLayout.NO_ERASE

    def calculate_replacing_mode(self, config: EraseConfig) -> EraseResult:
        full = config.path(config.text_width)
        return EraseResult(
            key_times=(0.0, config.slot_print_end(), 1.0),
            values=(config.path(0.0), full, full),
        )

    def calculate_multi_line_mode(self, config: EraseConfig) -> EraseResult:
        print_start = config.print_start or 0.0
        print_end = config.print_end if config.print_end is not None else 1.0
        cut = max(print_end, STACKED_NO_ERASE_CUT)
        empty = config.path(0.0)
        full = config.path(config.text_width)
        return EraseResult(
            key_times=(0.0, print_start, print_end, cut, 1.0),
            values=(empty, empty, full, full, empty),
        )
