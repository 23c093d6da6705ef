"""Shared test fixtures for rsvg-convert-cache."""

import io
from pathlib import Path

import pytest

from rsvg_cache.converter.base import SvgConverter
from rsvg_cache.converter.errors import ConverterError
from rsvg_cache.converter.models import ConversionRequest, ConverterOutput, OutputFormat
from rsvg_cache.converter.orchestrator import ConversionOrchestrator


class FakeConverter(SvgConverter):
    """Records calls and writes canned bytes instead of spawning Inkscape."""

    def __init__(
        self,
        payload: bytes = b"\x89PNG fake image",
        *,
        fail_with: str | None = None,
        write_output: bool = True,
        stdout: bytes = b"",
        stderr: bytes = b"",
    ) -> None:
        self.payload = payload
        self.fail_with = fail_with
        self.write_output = write_output
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[tuple[ConversionRequest, OutputFormat, Path, bytes | None]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def convert(self, request, fmt, target, stdin_data=None):
        self.calls.append((request, fmt, target, stdin_data))
        if self.fail_with is not None:
            raise ConverterError(
                "inkscape exited with status 1", returncode=1, stderr=self.fail_with
            )
        if self.write_output:
            target.write_bytes(self.payload if stdin_data is None else self.payload + stdin_data)
        return ConverterOutput(stdout=self.stdout, stderr=self.stderr)


@pytest.fixture
def fake_converter():
    return FakeConverter()


@pytest.fixture
def cache_root(tmp_path):
    return tmp_path / "rsvg-convert-cache"


@pytest.fixture
def svg_file(tmp_path):
    f = tmp_path / "a.svg"
    f.write_text('<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"/>')
    return f


@pytest.fixture
def sample_request(svg_file, tmp_path):
    return ConversionRequest(format="png", input=svg_file, output=tmp_path / "a.png")


@pytest.fixture
def streams():
    """Binary stand-ins for stdin/stdout/stderr."""
    return {
        "stdin": io.BytesIO(b"<svg/>"),
        "stdout": io.BytesIO(),
        "stderr": io.BytesIO(),
    }


@pytest.fixture
def make_orchestrator(cache_root, fake_converter, streams):
    def _make(converter=None, **kwargs):
        return ConversionOrchestrator(
            cache_root,
            converter or fake_converter,
            **streams,
            **kwargs,
        )

    return _make
