"""Failure taxonomy for a single conversion run."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class; ``phase`` names the step of the run that failed."""

    phase = "conversion"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(ConversionError):
    """Request violates a precondition (e.g. unequal DPI axes)."""

    phase = "request"


class UnsupportedFormatError(ConversionError):
    phase = "format"

    def __init__(self, format: str, supported: list[str]) -> None:
        self.format = format
        super().__init__(
            f"Unsupported output format: {format!r}. Supported: {', '.join(supported)}"
        )


class CacheDirectoryError(ConversionError):
    phase = "cache"


class ConverterError(ConversionError):
    """The external converter could not be launched or exited non-zero."""

    phase = "convert"

    def __init__(
        self, message: str, returncode: int | None = None, stderr: str = ""
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        if stderr:
            message = f"{message}\n{stderr.rstrip()}"
        super().__init__(message)


class DeliveryError(ConversionError):
    """Artifact missing after conversion, or copying it to the destination failed."""

    phase = "delivery"
