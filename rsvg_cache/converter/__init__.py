"""SVG conversion subsystem: cache keys, Inkscape runner, orchestration."""

from rsvg_cache.converter.base import SvgConverter
from rsvg_cache.converter.cache_key import derive_cache_key
from rsvg_cache.converter.errors import (
    CacheDirectoryError,
    ConversionError,
    ConverterError,
    DeliveryError,
    InvalidRequestError,
    UnsupportedFormatError,
)
from rsvg_cache.converter.inkscape import InkscapeConverter
from rsvg_cache.converter.models import (
    ConversionOutcome,
    ConversionRequest,
    ConverterOutput,
    OutputFormat,
    resolve_format,
)
from rsvg_cache.converter.orchestrator import ConversionOrchestrator

__all__ = [
    "CacheDirectoryError",
    "ConversionError",
    "ConversionOrchestrator",
    "ConversionOutcome",
    "ConversionRequest",
    "ConverterError",
    "ConverterOutput",
    "DeliveryError",
    "InkscapeConverter",
    "InvalidRequestError",
    "OutputFormat",
    "SvgConverter",
    "UnsupportedFormatError",
    "derive_cache_key",
    "resolve_format",
]
