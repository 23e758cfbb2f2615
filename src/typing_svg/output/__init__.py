"""Output providers for synthesized typing timelines."""

from dataclasses import dataclass
from pathlib import Path

from .base import OutputProvider
from .json_provider import JsonOutputProvider, timeline_to_dict
from .svg_provider import SvgOutputProvider


@dataclass(frozen=True)
class OutputFormatSpec:
    extension: str
    media_type: str
    provider_class: type[OutputProvider]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "svg": OutputFormatSpec(
        extension=".svg",
        media_type="image/svg+xml",
        provider_class=SvgOutputProvider,
    ),
    "json": OutputFormatSpec(
        extension=".json",
        media_type="application/json",
        provider_class=JsonOutputProvider,
    ),
}


def resolve_output_provider(file_path: str) -> OutputProvider:
    """
    Resolve the appropriate output provider based on file extension.

    Args:
        file_path: Output file path (extension determines format)

    Returns:
        An OutputProvider instance

    Raises:
        ValueError: If file extension is not supported
    """
    ext = Path(file_path).suffix.lower()
    spec = _output_spec_from_extension(ext)
    return spec.provider_class(file_path)


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS.keys())


def media_type_for_output_format(output_format: str) -> str:
    """Resolve media type for a supported output format."""
    return _output_spec_from_format(output_format).media_type


def _output_spec_from_extension(ext: str) -> OutputFormatSpec:
    spec = _OUTPUT_FORMATS.get(ext.removeprefix("."))
    if spec is not None:
        return spec
    supported = ", ".join(spec.extension for spec in _OUTPUT_FORMATS.values())
    raise ValueError(f"Unsupported output format: {ext}. Supported formats: {supported}")


def _output_spec_from_format(output_format: str) -> OutputFormatSpec:
    spec = _OUTPUT_FORMATS.get(output_format.lower())
    if spec is not None:
        return spec
    supported = ", ".join(supported_output_formats())
    raise ValueError(f"Invalid format. Choose from: {supported}")


__all__ = [
    "OutputFormatSpec",
    "OutputProvider",
    "JsonOutputProvider",
    "SvgOutputProvider",
    "resolve_output_provider",
    "supported_output_formats",
    "media_type_for_output_format",
    "timeline_to_dict",
]
