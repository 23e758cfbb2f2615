"""Animated typing SVG generation."""

from .animation_pipeline import build_timeline, encode_typing_svg
from .params import DEFAULT_PARAMS, GlobalParams, build_params, parse_query_params

__all__ = [
    "DEFAULT_PARAMS",
    "GlobalParams",
    "build_params",
    "build_timeline",
    "encode_typing_svg",
    "parse_query_params",
]
