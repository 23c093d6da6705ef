"""Pydantic models for the conversion subsystem."""

from __future__ import annotations

import math
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rsvg_cache.converter.errors import UnsupportedFormatError


class OutputFormat(str, Enum):
    """Output formats the external converter can export."""

    png = "png"
    pdf = "pdf"
    ps = "ps"
    eps = "eps"
    wmf = "wmf"
    emf = "emf"

    @property
    def extension(self) -> str:
        return self.value


def resolve_format(name: str) -> OutputFormat:
    """Map a format string onto OutputFormat, case-insensitively."""
    try:
        return OutputFormat(name.strip().lower())
    except ValueError:
        raise UnsupportedFormatError(name, [f.value for f in OutputFormat]) from None


class ConversionRequest(BaseModel):
    """Normalized parameters of one conversion.

    ``input`` of None means the SVG is read from standard input; ``output``
    of None means the artifact is streamed to standard output.
    """

    model_config = ConfigDict(frozen=True)

    dpi_x: float = Field(default=90.0, gt=0)
    dpi_y: float = Field(default=90.0, gt=0)
    x_zoom: float = Field(default=1.0, gt=0)
    y_zoom: float = Field(default=1.0, gt=0)
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)
    format: str = OutputFormat.png.value
    keep_aspect_ratio: bool = False
    input: Path | None = None
    output: Path | None = None

    @field_validator("dpi_x", "dpi_y", "x_zoom", "y_zoom")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v

    @property
    def reads_stdin(self) -> bool:
        return self.input is None


class ConverterOutput(BaseModel):
    """Captured streams of a successful converter run."""

    stdout: bytes = b""
    stderr: bytes = b""


class ConversionOutcome(BaseModel):
    """What a completed run delivered and where it came from."""

    cache_path: Path
    cache_key: str | None
    cached: bool = False
    destination: Path | None = None
