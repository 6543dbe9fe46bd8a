"""Bioleptic codec subpackage: compressor, decompressor and their stages."""

from .compressor import (
    QuantizedSignal,
    compress,
    pack_coefficients,
    quantize_signal,
    select_levels,
)
from .decompressor import decompress, read_header
from .entropy import entropy_decode, entropy_encode
from .transform import DwtEngine, DwtSize, MultiLevelDwt, make_engine

__all__ = [
    "QuantizedSignal",
    "compress",
    "decompress",
    "read_header",
    "pack_coefficients",
    "quantize_signal",
    "select_levels",
    "entropy_encode",
    "entropy_decode",
    "DwtEngine",
    "DwtSize",
    "MultiLevelDwt",
    "make_engine",
]
