"""Abstract converter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rsvg_cache.converter.models import ConversionRequest, ConverterOutput, OutputFormat


class SvgConverter(ABC):
    """Turns an SVG into ``fmt`` at ``target``.

    Implementations raise ConverterError on failure. ``stdin_data`` holds the
    SVG bytes when the request reads from standard input.
    """

    @abstractmethod
    def convert(
        self,
        request: ConversionRequest,
        fmt: OutputFormat,
        target: Path,
        stdin_data: bytes | None = None,
    ) -> ConverterOutput:
        ...
