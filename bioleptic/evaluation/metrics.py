"""Fidelity and size metrics for Bioleptic round trips: PRD, RMSE, ratio."""

import time
from typing import Optional

import numpy as np

from ..config import CompressionOptions


def prd(original: np.ndarray, reconstructed: np.ndarray) -> float:
    """Percent root-mean-square difference, mean-removed.

    PRD = 100 * sqrt(sum((x - y)^2) / sum((x - mean(x))^2))

    Returns 0.0 for a constant original (zero denominator).
    """
    x = np.asarray(original, dtype=np.float64).ravel()
    y = np.asarray(reconstructed, dtype=np.float64).ravel()
    if x.shape != y.shape:
        raise ValueError(f"Length mismatch: {x.size} vs {y.size}")

    num = np.sum((x - y) ** 2)
    den = np.sum((x - x.mean()) ** 2)
    if den == 0.0:
        return 0.0
    return float(np.sqrt(num / den) * 100.0)


def reconstruction_rmse(original: np.ndarray, reconstructed: np.ndarray) -> float:
    """Root mean squared error between original and reconstructed data."""
    x = np.asarray(original, dtype=np.float64).ravel()
    y = np.asarray(reconstructed, dtype=np.float64).ravel()
    return float(np.sqrt(np.mean((x - y) ** 2)))


def compression_ratio(raw_bytes: int, compressed_bytes: int) -> float:
    return raw_bytes / max(compressed_bytes, 1)


def zeroed_detail_count(samples, options: Optional[CompressionOptions] = None) -> dict:
    """How many quantized detail coefficients end up zero after thresholding."""
    from ..codec.compressor import quantize_signal

    quantized = quantize_signal(samples, options)
    n_details = sum(d.size for d in quantized.details)
    zeroed = quantized.zeroed_details
    return {
        "levels": quantized.levels,
        "n_coefficients": quantized.n_coefficients,
        "n_details": n_details,
        "zeroed_details": zeroed,
        "zeroed_fraction": zeroed / max(n_details, 1),
    }


def evaluate_roundtrip(samples, options: Optional[CompressionOptions] = None) -> dict:
    """Compress then decompress ``samples`` and report size, error and timing."""
    from ..codec.compressor import compress
    from ..codec.decompressor import decompress

    original = np.asarray(samples, dtype=np.float32).ravel()

    t0 = time.perf_counter()
    stream = compress(original, options)
    t1 = time.perf_counter()
    recovered = decompress(stream)
    t2 = time.perf_counter()

    return {
        "n_samples": int(original.size),
        "raw_bytes": original.nbytes,
        "compressed_bytes": len(stream),
        "ratio": compression_ratio(original.nbytes, len(stream)),
        "prd": prd(original, recovered),
        "rmse": reconstruction_rmse(original, recovered),
        "encode_time_sec": t1 - t0,
        "decode_time_sec": t2 - t1,
    }
