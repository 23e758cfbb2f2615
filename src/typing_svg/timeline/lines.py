"""Immutable line values measured once per generation request."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from ..fonts.metrics import CharacterWidthOracle


@dataclass(frozen=True)
class StyledSpan:
    """A run of text sharing one style inside a line."""

    text: str
    color: str | None = None
    font_size: float | None = None
    font_family: str | None = None
    font_weight: int | None = None

    @property
    def is_plain(self) -> bool:
        return (
            self.color is None
            and self.font_size is None
            and self.font_family is None
            and self.font_weight is None
        )


@dataclass(frozen=True)
class Line:
    """One unit of text to type and erase."""

    index: int
    spans: tuple[StyledSpan, ...]
    width: float

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def is_styled(self) -> bool:
        return any(not span.is_plain for span in self.spans)


LineSource = str | StyledSpan | Sequence[StyledSpan]


def as_spans(source: LineSource) -> tuple[StyledSpan, ...]:
    if isinstance(source, str):
        return (StyledSpan(source),) if source else ()
    if isinstance(source, StyledSpan):
        return (source,) if source.text else ()
    return tuple(span for span in source if span.text)


def truncate_spans(spans: Sequence[StyledSpan], char_count: int) -> tuple[StyledSpan, ...]:
    """Keep the first ``char_count`` characters, preserving span styles."""
    kept: list[StyledSpan] = []
    remaining = char_count
    for span in spans:
        if remaining <= 0:
            break
        if len(span.text) <= remaining:
            kept.append(span)
            remaining -= len(span.text)
            continue
        kept.append(
            StyledSpan(
                span.text[:remaining],
                color=span.color,
                font_size=span.font_size,
                font_family=span.font_family,
                font_weight=span.font_weight,
            )
        )
        remaining = 0
    return tuple(kept)


def build_lines(
    sources: Iterable[LineSource],
    oracle: "CharacterWidthOracle",
    font_size: float,
    letter_spacing: float = 0.0,
) -> tuple[Line, ...]:
    """Drop empty lines, index the rest and measure their rendered width."""
    lines: list[Line] = []
    for source in sources:
        spans = as_spans(source)
        if not spans:
            continue
        width = oracle.span_width(spans, font_size, letter_spacing)
        lines.append(Line(index=len(lines), spans=spans, width=width))
    return tuple(lines)
