"""Cache-aware conversion runs: key, reuse or convert, then deliver."""

from __future__ import annotations

import logging
import os
import secrets
import shutil
import sys
from pathlib import Path
from typing import BinaryIO

from rsvg_cache.converter.base import SvgConverter
from rsvg_cache.converter.cache_key import check_request, derive_cache_key
from rsvg_cache.converter.errors import (
    CacheDirectoryError,
    DeliveryError,
    InvalidRequestError,
)
from rsvg_cache.converter.models import (
    ConversionOutcome,
    ConversionRequest,
    ConverterOutput,
    OutputFormat,
    resolve_format,
)

logger = logging.getLogger(__name__)

STDIN_STEM = "from_stdin"


class ConversionOrchestrator:
    """Runs one conversion request against a flat on-disk cache.

    Entries are named ``<key>.<ext>``. Standard-input requests have no key and
    always reconvert into ``from_stdin.<ext>``. Nothing is ever evicted.
    """

    def __init__(
        self,
        cache_root: Path,
        converter: SvgConverter,
        *,
        use_cache: bool = True,
        track_modifications: bool = False,
        stdin: BinaryIO | None = None,
        stdout: BinaryIO | None = None,
        stderr: BinaryIO | None = None,
    ) -> None:
        self.cache_root = Path(cache_root)
        self.converter = converter
        self.use_cache = use_cache
        self.track_modifications = track_modifications
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr

    # ------------------------------------------------------------------
    # Streams (resolved lazily so callers may swap sys.std* around us)
    # ------------------------------------------------------------------

    @property
    def stdin(self) -> BinaryIO:
        return self._stdin if self._stdin is not None else sys.stdin.buffer

    @property
    def stdout(self) -> BinaryIO:
        return self._stdout if self._stdout is not None else sys.stdout.buffer

    @property
    def stderr(self) -> BinaryIO:
        return self._stderr if self._stderr is not None else sys.stderr.buffer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def cache_path_for(self, key: str | None, fmt: OutputFormat) -> Path:
        stem = key if key is not None else STDIN_STEM
        return self.cache_root / f"{stem}.{fmt.extension}"

    def run(self, request: ConversionRequest) -> ConversionOutcome:
        """Convert (or reuse) and deliver. Raises ConversionError subclasses."""
        # DPI errors take precedence over format errors; derive_cache_key
        # repeats this check for callers that use it on its own.
        check_request(request)
        fmt = resolve_format(request.format)
        key = derive_cache_key(request, self._input_stamp(request))

        self._ensure_cache_root()
        cache_path = self.cache_path_for(key, fmt)

        cached = self.use_cache and key is not None and cache_path.is_file()
        if cached:
            logger.info("Loading from cache: %s", cache_path)
        else:
            logger.info("Converting file: %s", request.input or "<stdin>")
            output = self._convert(request, fmt, cache_path)
            self._relay(output, request)

        self._deliver(cache_path, request.output)
        return ConversionOutcome(
            cache_path=cache_path,
            cache_key=key,
            cached=cached,
            destination=request.output,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _input_stamp(self, request: ConversionRequest) -> str | None:
        if not self.track_modifications or request.reads_stdin:
            return None
        try:
            st = os.stat(request.input)
        except OSError as e:
            raise InvalidRequestError(f"Cannot read input file {request.input}: {e}") from e
        return f"{st.st_mtime_ns}:{st.st_size}"

    def _ensure_cache_root(self) -> None:
        try:
            self.cache_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirectoryError(
                f"Cannot create cache directory {self.cache_root}: {e}"
            ) from e

    def _convert(
        self, request: ConversionRequest, fmt: OutputFormat, cache_path: Path
    ) -> ConverterOutput:
        """Run the converter into a partial file, then move it over the entry."""
        partial = cache_path.with_name(
            f"{cache_path.stem}.{os.getpid()}-{secrets.token_hex(4)}.partial{cache_path.suffix}"
        )
        stdin_data = self.stdin.read() if request.reads_stdin else None
        try:
            output = self.converter.convert(request, fmt, partial, stdin_data)
            if not partial.is_file():
                raise DeliveryError(
                    f"No output was generated for {request.input or '<stdin>'}"
                )
            os.replace(partial, cache_path)
        except OSError as e:
            raise DeliveryError(f"Cannot store converted file in cache: {e}") from e
        finally:
            partial.unlink(missing_ok=True)
        return output

    def _relay(self, output: ConverterOutput, request: ConversionRequest) -> None:
        """Pass the converter's own diagnostics through.

        Its stdout is diverted to stderr when stdout carries the artifact.
        """
        if output.stdout:
            sink = self.stdout if request.output is not None else self.stderr
            sink.write(output.stdout)
            sink.flush()
        if output.stderr:
            self.stderr.write(output.stderr)
            self.stderr.flush()

    def _deliver(self, cache_path: Path, destination: Path | None) -> None:
        if not cache_path.is_file():
            raise DeliveryError(f"No output was generated: {cache_path} is missing")

        if destination is not None:
            try:
                shutil.copyfile(cache_path, destination)
            except OSError as e:
                raise DeliveryError(
                    f"Copy failed from {cache_path} to {destination}: {e}"
                ) from e
            logger.debug("Copied %s to %s", cache_path, destination)
            return

        try:
            with cache_path.open("rb") as src:
                shutil.copyfileobj(src, self.stdout)
            self.stdout.flush()
        except OSError as e:
            raise DeliveryError(f"Copy failed from {cache_path} to stdout: {e}") from e
