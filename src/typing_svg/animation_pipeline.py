"""Shared synthesis orchestration used by CLI and web app entry points."""

import logging
import os
from functools import lru_cache
from typing import Iterable

from .constants import DEFAULT_PLACEHOLDER_LINE, FONT_PATH_ENV
from .fonts.metrics import CharacterWidthOracle
from .output import SvgOutputProvider, resolve_output_provider
from .output.base import OutputProvider
from .params import GlobalParams
from .timeline.assembler import assemble_timelines
from .timeline.cursor import synthesize_cursor
from .timeline.layout import start_y
from .timeline.lines import LineSource, build_lines
from .timeline.models import TypingTimeline

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _oracle_for_font(font_path: str | None) -> CharacterWidthOracle:
    return CharacterWidthOracle.from_font_path(font_path)


def resolve_font_path(params: GlobalParams) -> str | None:
    """Font file from the parameters, else from the environment."""
    return params.font_path or os.getenv(FONT_PATH_ENV) or None


def resolve_oracle(params: GlobalParams) -> CharacterWidthOracle:
    """Width oracle for the configured font, shared across requests for the same file."""
    return _oracle_for_font(resolve_font_path(params))


def build_timeline(
    lines: Iterable[LineSource],
    params: GlobalParams,
    oracle: CharacterWidthOracle | None = None,
) -> TypingTimeline:
    """
    Synthesize the complete typing timeline for a request.

    Args:
        lines: Text lines, already substituted; empty lines are dropped
        params: Normalized generation parameters
        oracle: Width oracle; resolved from the configured font when omitted

    Returns:
        Per-line timelines plus the cursor plan
    """
    oracle = oracle or resolve_oracle(params)
    measured = build_lines(lines, oracle, params.font_size, params.letter_spacing)
    if not measured:
        logger.info("No non-empty lines given, using placeholder text")
        measured = build_lines(
            [DEFAULT_PLACEHOLDER_LINE], oracle, params.font_size, params.letter_spacing
        )

    base_y = start_y(params, len(measured), oracle)
    topology, timelines = assemble_timelines(measured, params, oracle, base_y)
    timelines, cursor = synthesize_cursor(topology, timelines, params)
    return TypingTimeline(
        topology=topology,
        lines=timelines,
        texts=measured,
        params=params,
        cursor=cursor,
    )


def encode_typing_svg(
    lines: Iterable[LineSource],
    params: GlobalParams,
    oracle: CharacterWidthOracle | None = None,
) -> bytes:
    """Synthesize and encode an animated typing SVG."""
    return SvgOutputProvider().encode(build_timeline(lines, params, oracle))


def encode_timeline(
    lines: Iterable[LineSource],
    params: GlobalParams,
    output_path: str,
    *,
    provider: OutputProvider | None = None,
) -> bytes:
    """Encode output bytes in the format implied by ``output_path`` or ``provider``."""
    target_provider = provider or resolve_output_provider(output_path)
    return target_provider.encode(build_timeline(lines, params))
