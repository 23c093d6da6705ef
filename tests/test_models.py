"""Tests for conversion request models and format resolution."""

import math
from pathlib import Path

import pytest
from pydantic import ValidationError

from rsvg_cache.converter.errors import UnsupportedFormatError
from rsvg_cache.converter.models import ConversionRequest, OutputFormat, resolve_format


class TestConversionRequest:
    def test_defaults(self):
        req = ConversionRequest()
        assert req.dpi_x == 90.0
        assert req.dpi_y == 90.0
        assert req.x_zoom == 1.0
        assert req.y_zoom == 1.0
        assert req.width is None
        assert req.height is None
        assert req.format == "png"
        assert req.keep_aspect_ratio is False
        assert req.reads_stdin is True
        assert req.output is None

    def test_file_input_does_not_read_stdin(self):
        assert ConversionRequest(input=Path("x.svg")).reads_stdin is False

    def test_frozen(self):
        req = ConversionRequest()
        with pytest.raises(ValidationError):
            req.width = 10

    @pytest.mark.parametrize("field", ["dpi_x", "dpi_y", "x_zoom", "y_zoom"])
    def test_infinite_rejected(self, field):
        with pytest.raises(ValidationError):
            ConversionRequest(**{field: math.inf})

    @pytest.mark.parametrize("field", ["dpi_x", "x_zoom"])
    def test_non_positive_rejected(self, field):
        with pytest.raises(ValidationError):
            ConversionRequest(**{field: 0})

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            ConversionRequest(dpi_x=math.nan)

    def test_zero_width_rejected(self):
        with pytest.raises(ValidationError):
            ConversionRequest(width=0)

    def test_unequal_dpi_accepted_by_model(self):
        req = ConversionRequest(dpi_x=90, dpi_y=72)
        assert req.dpi_y == 72


class TestResolveFormat:
    @pytest.mark.parametrize("name", ["png", "pdf", "ps", "eps", "wmf", "emf"])
    def test_supported(self, name):
        assert resolve_format(name) is OutputFormat(name)

    def test_case_insensitive(self):
        assert resolve_format("PDF") is OutputFormat.pdf

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            resolve_format("bmp")
        assert exc_info.value.format == "bmp"
        assert exc_info.value.phase == "format"
        assert "Unsupported output format" in str(exc_info.value)

    def test_extension_matches_value(self):
        assert OutputFormat.eps.extension == "eps"
