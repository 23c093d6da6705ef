"""CLI entry point: a caching, rsvg-convert compatible front end."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from rsvg_cache import __version__
from rsvg_cache.config import RsvgCacheConfig, load_config
from rsvg_cache.converter import (
    ConversionError,
    ConversionOrchestrator,
    ConversionRequest,
    InkscapeConverter,
)

app = typer.Typer(
    name="rsvg-convert",
    help="Convert SVG files via Inkscape, reusing earlier conversions from a cache.",
    add_completion=False,
)

err_console = Console(stderr=True, soft_wrap=True)

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "level": record.levelname.lower(),
                "logger": record.name,
                "message": record.getMessage(),
            }
        )


def _configure_logging(cfg: RsvgCacheConfig) -> None:
    """Send package logs to stderr; stdout may be carrying the artifact."""
    logger = logging.getLogger("rsvg_cache")
    logger.handlers.clear()
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(console=err_console, show_time=False, show_path=False)
    logger.addHandler(handler)
    logger.setLevel(_LOG_LEVELS[cfg.log_level])
    logger.propagate = False


def _fail(label: str, message: str) -> NoReturn:
    err_console.print(f"[red]{label}:[/red] {escape(message)}")
    raise typer.Exit(1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rsvg-convert (rsvg-convert-cache) {__version__}")
        raise typer.Exit()


@app.command()
def convert(
    input: Annotated[
        str | None,
        typer.Argument(help="SVG file to convert; standard input when omitted or '-'"),
    ] = None,
    dpi_x: Annotated[
        float, typer.Option("--dpi-x", "-d", help="Pixels per inch, horizontal")
    ] = 90.0,
    dpi_y: Annotated[
        float, typer.Option("--dpi-y", "-p", help="Pixels per inch, vertical")
    ] = 90.0,
    x_zoom: Annotated[
        float, typer.Option("--x-zoom", "-x", help="Horizontal zoom factor")
    ] = 1.0,
    y_zoom: Annotated[
        float, typer.Option("--y-zoom", "-y", help="Vertical zoom factor")
    ] = 1.0,
    width: Annotated[
        int | None, typer.Option("--width", "-w", help="Output width in pixels")
    ] = None,
    height: Annotated[
        int | None, typer.Option("--height", "-h", help="Output height in pixels")
    ] = None,
    format: Annotated[
        str, typer.Option("--format", "-f", help="png, pdf, ps, eps, wmf or emf")
    ] = "png",
    keep_aspect_ratio: Annotated[
        bool, typer.Option("--keep-aspect-ratio", "-a", help="Preserve the aspect ratio")
    ] = False,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output file; standard output when omitted"),
    ] = None,
    config: Annotated[
        str | None, typer.Option("--config", help="Path to rsvg-cache.yaml")
    ] = None,
    cache_dir: Annotated[
        str | None, typer.Option("--cache-dir", help="Override the cache directory")
    ] = None,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Always reconvert, refreshing the cache")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-v", callback=_version_callback, is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Convert an SVG to FORMAT, serving repeated requests from the cache."""
    try:
        cfg = load_config(config)
    except ValueError as e:
        _fail("Error", str(e))

    _configure_logging(cfg)

    try:
        request = ConversionRequest(
            dpi_x=dpi_x,
            dpi_y=dpi_y,
            x_zoom=x_zoom,
            y_zoom=y_zoom,
            width=width,
            height=height,
            format=format,
            keep_aspect_ratio=keep_aspect_ratio,
            input=None if input in (None, "-") else Path(input),
            output=Path(output) if output else None,
        )
    except ValidationError as e:
        _fail("Invalid arguments", str(e))

    orchestrator = ConversionOrchestrator(
        Path(cache_dir) if cache_dir else cfg.cache.resolve_directory(),
        InkscapeConverter(cfg.converter),
        use_cache=cfg.cache.enabled and not no_cache,
        track_modifications=cfg.cache.track_modifications,
    )

    try:
        orchestrator.run(request)
    except ConversionError as e:
        _fail(f"Error ({e.phase})", str(e))
