"""rsvg-convert-cache - caching rsvg-convert replacement backed by Inkscape."""

from rsvg_cache.config import RsvgCacheConfig, load_config
from rsvg_cache.converter import (
    ConversionOrchestrator,
    ConversionRequest,
    InkscapeConverter,
    derive_cache_key,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionOrchestrator",
    "ConversionRequest",
    "InkscapeConverter",
    "RsvgCacheConfig",
    "derive_cache_key",
    "load_config",
]
