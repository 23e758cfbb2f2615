"""Print and erase durations derived from character counts."""


def ms_per_char(rate: float) -> float:
    """Milliseconds spent on one character at ``rate`` characters per second."""
    return 1000 / rate


def char_duration_ms(char_count: int, rate: float) -> float:
    """
    Duration of typing or erasing ``char_count`` characters.

    Callers never pass empty lines and must supply a positive rate; the
    parameter layer clamps rates before they reach the timeline engine.
    """
    return char_count * ms_per_char(rate)
