"""Bioleptic: lossy wavelet compression for 1-D physiological signals.

    import bioleptic
    stream = bioleptic.compress(ppg)                      # CDF 9/7, scale 11
    stream = bioleptic.compress(ppg, CompressionOptions("sym4", 10, "medium"))
    recovered = bioleptic.decompress(stream)              # float32, len(ppg)

Streams are a 52-byte header (magic 'BILP') followed by a zstd payload of
quantized wavelet coefficients.
"""

__version__ = "0.1.0"

import time
from pathlib import Path
from typing import Optional

import numpy as np

from .codec.compressor import compress
from .codec.decompressor import decompress, read_header
from .config import (
    CompressionMethod,
    CompressionOptions,
    CutoffLevel,
    DataType,
    QuantizationScale,
)
from .errors import (
    BiolepticError,
    DecompressionError,
    InvalidCompressionMethod,
    InvalidDataType,
    InvalidHeader,
    InvalidMagic,
    InvalidQuantizationScale,
    InvalidVersion,
    OutOfMemoryError,
    UnderlyingCompressorError,
    UnderlyingDwtError,
    UnsupportedCompressorConfiguration,
)
from .storage.header import BIOLEPTIC_HEADER_SIZE, BIOLEPTIC_MAGIC, BiolepticHeader

_RAW_SUFFIXES = (".f32", ".bin", ".raw")
_TEXT_SUFFIXES = (".csv", ".tsv", ".txt")


def load_signal(path: str) -> np.ndarray:
    """Load a 1-D float32 signal from .npy, .csv/.tsv/.txt or raw float32.

    Delimited text files use their first numeric column.
    """
    input_p = Path(path)
    suffix = input_p.suffix.lower()

    if suffix == ".npy":
        data = np.load(str(input_p))
    elif suffix in _TEXT_SUFFIXES:
        import pandas as pd
        sep = "\t" if suffix == ".tsv" else ","
        df = pd.read_csv(str(input_p), sep=sep)
        numeric = df.select_dtypes(include=[np.number])
        if numeric.shape[1] == 0:
            raise ValueError(f"No numeric column found in {input_p}")
        data = numeric.iloc[:, 0].values
    elif suffix in _RAW_SUFFIXES:
        data = np.fromfile(str(input_p), dtype="<f4")
    else:
        raise ValueError(
            f"Unsupported input format: {suffix!r}. "
            f"Use .npy, {', '.join(_TEXT_SUFFIXES)} or {', '.join(_RAW_SUFFIXES)}"
        )
    return np.asarray(data, dtype=np.float32).ravel()


def save_signal(data: np.ndarray, path: str) -> None:
    """Write a signal; the format follows the extension (default .npy)."""
    output_p = Path(path)
    suffix = output_p.suffix.lower()

    if suffix in _TEXT_SUFFIXES:
        import pandas as pd
        sep = "\t" if suffix == ".tsv" else ","
        pd.DataFrame({"signal": data}).to_csv(str(output_p), sep=sep, index=False)
    elif suffix in _RAW_SUFFIXES:
        data.astype("<f4").tofile(str(output_p))
    else:
        np.save(str(output_p), data)


def compress_file(
    input_path: str,
    output_path: str,
    options: Optional[CompressionOptions] = None,
) -> dict:
    """Compress a signal file to a Bioleptic stream on disk.

    Returns:
        Dict with compression stats (raw_bytes, compressed_bytes, ratio, ...).
    """
    options = options or CompressionOptions()
    input_p = Path(input_path)

    start = time.perf_counter()
    data = load_signal(str(input_p))
    compressed = compress(data, options)
    elapsed = time.perf_counter() - start

    out_p = Path(output_path)
    out_p.parent.mkdir(parents=True, exist_ok=True)
    out_p.write_bytes(compressed)

    raw_bytes = data.nbytes
    return {
        "input_path": str(input_p),
        "output_path": str(out_p),
        "n_samples": int(data.size),
        "raw_bytes": raw_bytes,
        "input_file_bytes": input_p.stat().st_size,
        "compressed_bytes": len(compressed),
        "ratio": raw_bytes / max(len(compressed), 1),
        "method": options.method.name,
        "scale": int(options.scale),
        "cutoff_level": options.cutoff_level.value,
        "elapsed_sec": elapsed,
    }


def decompress_file(input_path: str, output_path: str) -> dict:
    """Decompress a Bioleptic file; output format follows the extension."""
    input_p = Path(input_path)
    output_p = Path(output_path)

    start = time.perf_counter()
    data = decompress(input_p.read_bytes())
    elapsed = time.perf_counter() - start

    output_p.parent.mkdir(parents=True, exist_ok=True)
    save_signal(data, str(output_p))

    return {
        "input_path": str(input_p),
        "output_path": str(output_p),
        "n_samples": int(data.size),
        "dtype": str(data.dtype),
        "elapsed_sec": elapsed,
    }


__all__ = [
    "__version__",
    "BIOLEPTIC_HEADER_SIZE",
    "BIOLEPTIC_MAGIC",
    "BiolepticHeader",
    "CompressionMethod",
    "CompressionOptions",
    "CutoffLevel",
    "DataType",
    "QuantizationScale",
    "BiolepticError",
    "DecompressionError",
    "InvalidCompressionMethod",
    "InvalidDataType",
    "InvalidHeader",
    "InvalidMagic",
    "InvalidQuantizationScale",
    "InvalidVersion",
    "OutOfMemoryError",
    "UnderlyingCompressorError",
    "UnderlyingDwtError",
    "UnsupportedCompressorConfiguration",
    "compress",
    "decompress",
    "read_header",
    "compress_file",
    "decompress_file",
    "load_signal",
    "save_signal",
]
