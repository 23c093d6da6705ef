"""Inkscape command-line converter."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from rsvg_cache.config.models import ConverterConfig
from rsvg_cache.converter.base import SvgConverter
from rsvg_cache.converter.errors import ConverterError
from rsvg_cache.converter.models import ConversionRequest, ConverterOutput, OutputFormat

logger = logging.getLogger(__name__)


def _number(value: float) -> str:
    return f"{value:g}"


class InkscapeConverter(SvgConverter):
    """Shells out to Inkscape (1.x export flags) for each conversion."""

    def __init__(self, config: ConverterConfig) -> None:
        self.config = config

    def build_command(
        self, request: ConversionRequest, fmt: OutputFormat, target: Path
    ) -> list[str]:
        cmd = [self.config.executable]
        if request.reads_stdin:
            cmd.append("--pipe")
        else:
            cmd.append(str(request.input))
        cmd += [
            f"--export-type={fmt.value}",
            f"--export-filename={target}",
            f"--export-dpi={_number(request.dpi_x)}",
        ]
        if request.width is not None:
            cmd.append(f"--export-width={request.width}")
        if request.height is not None:
            cmd.append(f"--export-height={request.height}")
        cmd += self.config.extra_args
        return cmd

    def convert(
        self,
        request: ConversionRequest,
        fmt: OutputFormat,
        target: Path,
        stdin_data: bytes | None = None,
    ) -> ConverterOutput:
        cmd = self.build_command(request, fmt, target)
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                input=stdin_data if request.reads_stdin else None,
                stdin=None if request.reads_stdin else subprocess.DEVNULL,
                capture_output=True,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired:
            raise ConverterError(
                f"{self.config.executable} timed out after {_number(self.config.timeout)}s"
            ) from None
        except OSError as e:
            raise ConverterError(
                f"Failed to launch {self.config.executable!r}: {e}"
            ) from e

        if result.returncode != 0:
            raise ConverterError(
                f"{self.config.executable} exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr.decode(errors="replace"),
            )

        return ConverterOutput(stdout=result.stdout, stderr=result.stderr)
