"""Fade mode: text fades out while keeping its full width."""

from .base_mode import EraseConfig, EraseMode, EraseResult, StackedEraseLayout


class FadeEraseMode(EraseMode):
    """Width keyframes only mark boundaries; a parallel opacity track does the erasing."""

    name = "fade"
    stacked_layout = StackedEraseLayout.SHARED_WINDOW

    def calculate_replacing_mode(self, config: EraseConfig) -> EraseResult:
        fade_start, fade_end = config.slot_erase_window()
        full = config.path(config.text_width)
        return EraseResult(
            key_times=(0.0, config.slot_print_end(), fade_start, fade_end, 1.0),
            values=(config.path(0.0), full, full, full, full),
            use_fade=True,
            fade_start=fade_start,
            fade_end=fade_end,
        )

    def calculate_multi_line_mode(self, config: EraseConfig) -> EraseResult:
        fade_start = config.erase_start if config.erase_start is not None else 1.0
        fade_end = config.erase_end if config.erase_end is not None else 1.0
        empty = config.path(0.0)
        full = config.path(config.text_width)
        return EraseResult(
            key_times=(
                0.0,
                config.print_start or 0.0,
                config.print_end if config.print_end is not None else fade_start,
                fade_start,
                fade_end,
                1.0,
            ),
            values=(empty, empty, full, full, full, full),
            use_fade=True,
            fade_start=fade_start,
            fade_end=fade_end,
        )
