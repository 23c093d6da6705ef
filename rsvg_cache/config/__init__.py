from .loader import load_config
from .models import CacheConfig, ConverterConfig, RsvgCacheConfig

__all__ = [
    "CacheConfig",
    "ConverterConfig",
    "RsvgCacheConfig",
    "load_config",
]
