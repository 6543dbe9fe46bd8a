"""zstd stage: opaque byte-stream compression of the packed coefficients."""

import zstandard as zstd

from ..errors import DecompressionError, UnderlyingCompressorError

# zstd's own default effort level
DEFAULT_LEVEL = 3


def entropy_encode(payload: bytes, level: int = DEFAULT_LEVEL) -> bytes:
    try:
        cctx = zstd.ZstdCompressor(level=level)
        return cctx.compress(payload)
    except zstd.ZstdError as exc:
        raise UnderlyingCompressorError(str(exc)) from exc


def entropy_decode(payload: bytes, max_output_size: int) -> bytes:
    """Decode at most ``max_output_size`` bytes of a zstd frame.

    Frames without a recorded content size (as written by streaming
    encoders) are accepted. Output past the limit is never materialized.
    A truncated frame yields whatever prefix could be decoded; callers
    check the length against what they expect.
    """
    dctx = zstd.ZstdDecompressor()
    chunks = []
    remaining = max_output_size
    try:
        with dctx.stream_reader(payload) as reader:
            while remaining > 0:
                chunk = reader.read(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
    except zstd.ZstdError as exc:
        raise DecompressionError(f"Entropy decoding failed: {exc}") from exc
    return b"".join(chunks)
