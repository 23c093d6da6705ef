"""Cache key derivation for conversion requests."""

from __future__ import annotations

import hashlib
import math
import os

from rsvg_cache.converter.errors import InvalidRequestError
from rsvg_cache.converter.models import ConversionRequest

# Bumped whenever the record layout below changes.
KEY_VERSION = "1"


def _millis(value: float) -> int:
    """Fixed thousandths precision so equal decimal inputs hash alike."""
    return round(value * 1000)


def _optional(value: int | None) -> str:
    return "absent" if value is None else str(value)


def check_request(request: ConversionRequest) -> None:
    """Reject requests no conversion can honour."""
    for name in ("dpi_x", "dpi_y", "x_zoom", "y_zoom"):
        if not math.isfinite(getattr(request, name)):
            raise InvalidRequestError(f"{name} must be a finite number")
    if request.dpi_x != request.dpi_y:
        raise InvalidRequestError(
            f"Horizontal and vertical DPI must match "
            f"(got {request.dpi_x} and {request.dpi_y})"
        )


def derive_cache_key(
    request: ConversionRequest, input_stamp: str | None = None
) -> str | None:
    """Return a hex cache key for ``request``, or None when it reads stdin.

    ``input_stamp`` is an optional opaque marker of the input file's state
    (modification time and size) mixed into the key when given.
    """
    check_request(request)
    if request.reads_stdin:
        return None

    fields = [
        f"v={KEY_VERSION}",
        f"dpi={_millis(request.dpi_x)}",
        f"x_zoom={_millis(request.x_zoom)}",
        f"y_zoom={_millis(request.y_zoom)}",
        f"width={_optional(request.width)}",
        f"height={_optional(request.height)}",
        f"format={request.format.strip().lower()}",
        f"keep_aspect_ratio={int(request.keep_aspect_ratio)}",
        f"input={os.path.abspath(request.input)}",
    ]
    if input_stamp is not None:
        fields.append(f"stamp={input_stamp}")
    return hashlib.sha256("|".join(fields).encode()).hexdigest()
