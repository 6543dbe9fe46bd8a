"""Tests for CompressionOptions and the enumerations behind it."""

import pytest

from bioleptic.config import (
    CompressionMethod,
    CompressionOptions,
    CutoffLevel,
    QuantizationScale,
)
from bioleptic.errors import (
    BiolepticError,
    DecompressionError,
    InvalidCompressionMethod,
    InvalidQuantizationScale,
    OutOfMemoryError,
    UnsupportedCompressorConfiguration,
)


class TestCompressionOptions:
    def test_defaults(self):
        """Default configuration is CDF 9/7, scale 11, low cutoff."""
        options = CompressionOptions()
        assert options.method is CompressionMethod.CDF97
        assert options.scale is QuantizationScale.S11
        assert options.cutoff_level is CutoffLevel.LOW

    def test_from_method(self):
        options = CompressionOptions.from_method(CompressionMethod.DB4)
        assert options.method is CompressionMethod.DB4
        assert options.scale is QuantizationScale.S11
        assert options.cutoff_level is CutoffLevel.LOW

    def test_string_coercion(self):
        """Short names and plain ints are normalized to the enums."""
        options = CompressionOptions("SYM4", 8, "High")
        assert options.method is CompressionMethod.SYM4
        assert options.scale is QuantizationScale.S8
        assert options.cutoff_level is CutoffLevel.HIGH

    @pytest.mark.parametrize("scale", [0, 5, 13, 16])
    def test_invalid_scale(self, scale):
        with pytest.raises(InvalidQuantizationScale, match=str(scale)):
            CompressionOptions(scale=scale)

    def test_unknown_method(self):
        with pytest.raises(InvalidCompressionMethod, match="haar"):
            CompressionOptions(method="haar")

    def test_unknown_cutoff(self):
        with pytest.raises(ValueError, match="Unknown cutoff level"):
            CompressionOptions(cutoff_level="extreme")


class TestThreshold:
    @pytest.mark.parametrize("scale,base", [
        (6, 1), (7, 1), (8, 2), (9, 2), (10, 3), (11, 3), (12, 4),
    ])
    def test_base_threshold(self, scale, base):
        assert QuantizationScale(scale).base_threshold == base
        assert CompressionOptions(scale=scale).threshold == base

    @pytest.mark.parametrize("cutoff,factor", [("low", 1), ("medium", 3), ("high", 7)])
    def test_cutoff_factor(self, cutoff, factor):
        assert CutoffLevel(cutoff).factor == factor

    def test_threshold_product(self):
        """Threshold is base(scale) times the cutoff factor."""
        assert CompressionOptions(scale=11, cutoff_level="medium").threshold == 9
        assert CompressionOptions(scale=11, cutoff_level="high").threshold == 21
        assert CompressionOptions(scale=12, cutoff_level="high").threshold == 28
        assert CompressionOptions(scale=6, cutoff_level="high").threshold == 7

    def test_multiplier(self):
        assert QuantizationScale.S6.multiplier == 64.0
        assert QuantizationScale.S12.multiplier == 4096.0


class TestMethodTags:
    def test_from_tag(self):
        for method in CompressionMethod:
            assert CompressionMethod.from_tag(method.tag) is method

    def test_unknown_tag(self):
        with pytest.raises(InvalidCompressionMethod) as info:
            CompressionMethod.from_tag(b"xxxx")
        assert info.value.tag == b"xxxx"

    def test_non_utf8_tag(self):
        """Undecodable tags still produce a readable message."""
        with pytest.raises(InvalidCompressionMethod, match=r"\?\?\?\?"):
            CompressionMethod.from_tag(b"\xff\xfe\xfd\xfc")


class TestErrors:
    def test_hierarchy(self):
        for exc in (
            DecompressionError("x"),
            OutOfMemoryError(10),
            UnsupportedCompressorConfiguration("y"),
            InvalidQuantizationScale(3),
        ):
            assert isinstance(exc, BiolepticError)
            assert isinstance(exc, ValueError)

    def test_messages(self):
        assert str(DecompressionError("bad")) == "Can't decompress data, reason: bad"
        assert str(OutOfMemoryError(42)) == "Out of memory, can't allocate additional 42"
        assert str(UnsupportedCompressorConfiguration("empty")) == (
            "Unsupported compression configuration 'empty'"
        )
