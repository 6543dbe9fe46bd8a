"""Bioleptic stream -> signal.

Decode pipeline:
    1. Parse and validate the header
    2. Recompute per-level coefficient lengths from signal_length and method
    3. zstd-decode the declared payload slice
    4. Slice approximation + finest-first details, dequantize by 2**-scale
    5. Inverse multi-level DWT
    6. Undo mean-centering and range normalization

Every length and offset read from the stream is checked before it is used,
so corrupted or hostile input raises a ``BiolepticError`` subclass.
"""

from typing import Union

import numpy as np

from ..config import QuantizationScale
from ..errors import DecompressionError
from ..storage.header import BIOLEPTIC_HEADER_SIZE, BiolepticHeader
from .compressor import MAX_SIGNAL_LENGTH
from .entropy import entropy_decode
from .transform import make_engine

MAX_LEVELS = 10

_MIN_SCALE = int(min(QuantizationScale))
_MAX_SCALE = int(max(QuantizationScale))


def decompress(data: Union[bytes, bytearray, memoryview]) -> np.ndarray:
    """Decompress a Bioleptic stream into float32 samples.

    Args:
        data: Bytes produced by ``compress``. Trailing bytes after the
            declared payload are ignored.

    Returns:
        1-D float32 array of ``signal_length`` samples.

    Raises:
        InvalidHeader, InvalidMagic, InvalidVersion, InvalidDataType,
        InvalidCompressionMethod: the header failed validation.
        DecompressionError: inconsistent lengths, level count, scale, or
            an undecodable payload.
        UnderlyingDwtError: the inverse transform failed.
    """
    header = BiolepticHeader.from_bytes(data)

    signal_length = header.signal_length
    if signal_length > MAX_SIGNAL_LENGTH:
        raise DecompressionError(
            f"Can't decompress data bigger than {MAX_SIGNAL_LENGTH}, "
            f"but data was {signal_length}"
        )
    if signal_length == 0:
        raise DecompressionError("Signal length must be at least 1 but it was 0")

    levels = header.levels
    if levels > MAX_LEVELS:
        raise DecompressionError(
            f"Max supported level is {MAX_LEVELS} but it was {levels}"
        )
    if levels == 0:
        raise DecompressionError(f"Min supported level is 1 but it was {levels}")

    engine = make_engine(header.compression_method_enum())
    sizes = engine.level_sizes(signal_length, levels)

    compressed_size = header.compressed_size
    remaining = len(data) - BIOLEPTIC_HEADER_SIZE
    if remaining < compressed_size:
        raise DecompressionError(
            f"Minimum data size is {BIOLEPTIC_HEADER_SIZE + compressed_size}, "
            f"but it was {len(data)}"
        )

    approx_length = sizes[-1].approx_length
    expected = approx_length + sum(s.details_length for s in sizes)

    payload = bytes(data[BIOLEPTIC_HEADER_SIZE:BIOLEPTIC_HEADER_SIZE + compressed_size])
    decoded = entropy_decode(payload, max_output_size=2 * expected)
    quantized = np.frombuffer(decoded, dtype="<i2", count=len(decoded) // 2)

    scale = header.scale
    if scale < _MIN_SCALE or scale > _MAX_SCALE:
        raise DecompressionError(
            f"Supported scales only [{_MIN_SCALE}, {_MAX_SCALE}] but it was {scale}"
        )

    if quantized.size < expected:
        raise DecompressionError(
            f"Payload holds {quantized.size} coefficients but {levels} levels "
            f"over {signal_length} samples need {expected}"
        )

    rcp_scale = np.float32(1.0 / (1 << scale))
    approximation = quantized[:approx_length].astype(np.float32) * rcp_scale

    details = []
    cursor = approx_length
    for size in sizes:
        level = quantized[cursor:cursor + size.details_length]
        details.append(level.astype(np.float32) * rcp_scale)
        cursor += size.details_length

    signal = engine.multi_idwt(approximation, details, signal_length)

    v_min = np.float32(header.min_f32)
    v_max = np.float32(header.max_f32)
    v_mean = np.float32(header.mean_f32)
    with np.errstate(over="ignore", invalid="ignore"):
        value_range = np.float32(v_max - v_min)
        restored = (signal.astype(np.float32) + v_mean) * value_range + v_min
    return restored.astype(np.float32, copy=False)


def read_header(data: Union[bytes, bytearray, memoryview]) -> BiolepticHeader:
    """Parse and validate only the header of a stream."""
    return BiolepticHeader.from_bytes(data)
