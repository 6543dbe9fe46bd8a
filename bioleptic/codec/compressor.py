"""Signal -> Bioleptic stream.

Encode pipeline:
    1. Substitute non-finite samples (NaN, -inf -> 0.0; +inf -> 1.0)
    2. Range-normalize to [0, 1] and mean-center (near-constant input -> zeros)
    3. Multi-level DWT (level count from a fixed table on the sample count)
    4. Quantize every coefficient to int16 with a 2**scale multiplier
    5. Zero small detail coefficients (threshold from scale x cutoff)
    6. Pack approximation + finest-first details as little-endian int16
    7. zstd, then prepend the 52-byte header

Steps 1-5 are exposed through ``quantize_signal`` so the quantized
coefficients can be inspected without producing a stream.
"""

import warnings
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..config import CompressionOptions, DataType
from ..errors import (
    OutOfMemoryError,
    UnderlyingDwtError,
    UnsupportedCompressorConfiguration,
)
from ..storage.header import BiolepticHeader
from .entropy import entropy_encode
from .transform import make_engine

MAX_SIGNAL_LENGTH = 2**31 - 1

# Ranges at or below this are treated as a constant signal
DEGENERATE_RANGE = 1e-5

_INT16_MIN = float(np.iinfo(np.int16).min)
_INT16_MAX = float(np.iinfo(np.int16).max)


@dataclass
class QuantizedSignal:
    """Quantized, thresholded DWT coefficients plus normalization stats."""
    approximation: np.ndarray   # int16, coarsest level
    details: List[np.ndarray]   # int16 per level, finest first
    levels: int
    signal_length: int
    v_min: np.float32
    v_max: np.float32
    v_mean: np.float32

    @property
    def n_coefficients(self) -> int:
        return self.approximation.size + sum(d.size for d in self.details)

    @property
    def zeroed_details(self) -> int:
        """Number of detail coefficients equal to zero."""
        return int(sum(np.count_nonzero(d == 0) for d in self.details))


def _signal_length(samples) -> int:
    size = getattr(samples, "size", None)
    if isinstance(size, (int, np.integer)):
        return int(size)
    return len(samples)


def _check_length(n: int):
    if n == 0:
        raise UnsupportedCompressorConfiguration("Can't compress empty data")
    if n > MAX_SIGNAL_LENGTH:
        raise UnsupportedCompressorConfiguration(
            f"Can't compress data bigger than {MAX_SIGNAL_LENGTH}, but data was {n}"
        )


def select_levels(n: int) -> int:
    """DWT depth for ``n`` samples (fixed lookup, not log-scaled)."""
    if n < 20:
        return 1
    elif n < 40:
        return 2
    elif n < 60:
        return 3
    elif n < 80:
        return 4
    return 5


def substitute_non_finite(arr: np.ndarray) -> np.ndarray:
    """Replace NaN and -inf with 0.0 and +inf with 1.0 (returns a copy)."""
    nan_mask = np.isnan(arr)
    pos_mask = np.isposinf(arr)
    neg_mask = np.isneginf(arr)
    if not (nan_mask.any() or pos_mask.any() or neg_mask.any()):
        return arr.copy()

    if nan_mask.any():
        warnings.warn("Input contains NaN values; replacing with 0.0")
    if neg_mask.any():
        warnings.warn("Input contains -Inf values; replacing with 0.0")
    if pos_mask.any():
        warnings.warn("Input contains +Inf values; replacing with 1.0")

    out = arr.copy()
    out[nan_mask | neg_mask] = 0.0
    out[pos_mask] = 1.0
    return out


def normalize(values: np.ndarray) -> Tuple[np.ndarray, np.float32, np.float32, np.float32]:
    """Range-normalize and mean-center ``values``.

    Returns (working, min, max, mean). When ``max - min`` does not exceed
    ``DEGENERATE_RANGE`` the working signal is all zeros and mean is 0.0;
    min and max still carry the observed values.
    """
    v_min = np.float32(values.min())
    v_max = np.float32(values.max())
    with np.errstate(over="ignore"):
        value_range = np.float32(v_max - v_min)
    if not np.isfinite(value_range):
        raise UnsupportedCompressorConfiguration(
            f"Signal range [{v_min}, {v_max}] overflows float32"
        )

    if value_range > DEGENERATE_RANGE:
        range_scale = np.float32(1.0) / value_range
        working = (values - v_min) * range_scale
        v_mean = np.float32(working.sum(dtype=np.float32) / np.float32(values.size))
        working -= v_mean
    else:
        working = np.zeros_like(values)
        v_mean = np.float32(0.0)

    return working.astype(np.float32, copy=False), v_min, v_max, v_mean


def quantize(coefficients: np.ndarray, multiplier: float) -> np.ndarray:
    """Scale by ``multiplier``, saturate to int16 and drop the fraction."""
    scaled = coefficients.astype(np.float32) * np.float32(multiplier)
    return np.clip(scaled, _INT16_MIN, _INT16_MAX).astype(np.int16)


def threshold_details(details: np.ndarray, threshold: int) -> np.ndarray:
    """Zero every value whose magnitude is below ``threshold``."""
    # widen first: abs(int16 min) overflows in int16
    small = np.abs(details.astype(np.int32)) < threshold
    out = details.copy()
    out[small] = 0
    return out


def quantize_signal(samples, options: Optional[CompressionOptions] = None) -> QuantizedSignal:
    """Run the lossy part of the pipeline and return the coefficients."""
    options = options or CompressionOptions()

    _check_length(_signal_length(samples))

    # multi-dimensional input is flattened; only the flat size counts
    arr = np.asarray(samples, dtype=np.float32).ravel()
    n = arr.size
    _check_length(n)
    working, v_min, v_max, v_mean = normalize(substitute_non_finite(arr))

    levels = select_levels(n)
    engine = make_engine(options.method)
    dwt = engine.multi_dwt(working, levels)
    if dwt.levels == 0:
        raise UnderlyingDwtError(
            "Internal DWT returned zero levels, what shouldn't happen"
        )

    multiplier = options.scale.multiplier
    threshold = options.threshold
    approximation = quantize(dwt.approximation, multiplier)
    details = [threshold_details(quantize(d, multiplier), threshold) for d in dwt.details]

    return QuantizedSignal(
        approximation=approximation,
        details=details,
        levels=levels,
        signal_length=n,
        v_min=v_min,
        v_max=v_max,
        v_mean=v_mean,
    )


def pack_coefficients(quantized: QuantizedSignal) -> bytes:
    """Concatenate approximation and details into little-endian int16 bytes."""
    total_details = sum(d.size for d in quantized.details)
    try:
        packed = np.empty(quantized.approximation.size + total_details, dtype="<i2")
    except MemoryError as exc:
        raise OutOfMemoryError(total_details) from exc

    offset = quantized.approximation.size
    packed[:offset] = quantized.approximation
    for level_details in quantized.details:
        packed[offset:offset + level_details.size] = level_details
        offset += level_details.size
    return packed.tobytes()


def compress(samples, options: Optional[CompressionOptions] = None) -> bytes:
    """Compress a 1-D float signal into a self-describing Bioleptic stream.

    Args:
        samples: Anything ``np.asarray`` accepts; cast to float32 and
            flattened.
        options: Method, quantization scale and cutoff. Defaults to
            CDF 9/7, scale 11, low cutoff.

    Returns:
        Header bytes followed by the zstd-coded coefficient payload.

    Raises:
        UnsupportedCompressorConfiguration: empty or oversized input.
        UnderlyingDwtError: the transform failed.
        OutOfMemoryError: the packed coefficient buffer could not be allocated.
        UnderlyingCompressorError: zstd failed.
    """
    options = options or CompressionOptions()
    quantized = quantize_signal(samples, options)
    payload = entropy_encode(pack_coefficients(quantized))

    header = BiolepticHeader.new(
        data_type=DataType.FLOAT32,
        method=options.method,
        levels=quantized.levels,
        scale=options.scale,
        signal_length=quantized.signal_length,
        min=float(quantized.v_min),
        max=float(quantized.v_max),
        mean=float(quantized.v_mean),
        compressed_size=len(payload),
    )
    return header.to_bytes() + payload
