"""Locate and parse rsvg-cache.yaml."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RsvgCacheConfig

CONFIG_FILENAME = "rsvg-cache.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate files, highest precedence first."""
    paths = [Path.cwd() / CONFIG_FILENAME, Path.home() / ".rsvg-cache" / "config.yaml"]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> RsvgCacheConfig:
    """First non-empty file from config_search_paths wins; defaults otherwise.

    An explicit ``cli_path`` must exist. Any unreadable or invalid file raises
    ValueError naming it.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping at top level")
        try:
            return RsvgCacheConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return RsvgCacheConfig()


def _read_yaml(path: Path) -> object:
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e}") from e


def _expand_env_vars(value: object) -> object:
    """Substitute ${VAR} in every string; unset variables become empty."""
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    return value
