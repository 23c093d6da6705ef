import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

CACHE_DIR_NAME = "rsvg-convert-cache"


class ConverterConfig(BaseModel):
    executable: str = "inkscape"
    extra_args: list[str] = Field(default_factory=list)
    timeout: float | None = Field(default=None, gt=0)


class CacheConfig(BaseModel):
    enabled: bool = True
    directory: str | None = None
    track_modifications: bool = False

    def resolve_directory(self) -> Path:
        """Configured cache directory, or a fixed one under the system temp dir."""
        if self.directory:
            return Path(self.directory).expanduser()
        return Path(tempfile.gettempdir()) / CACHE_DIR_NAME


class RsvgCacheConfig(BaseModel):
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
