"""Error taxonomy for the Bioleptic codec.

Every failure the codec can report is a subclass of ``BiolepticError``,
which itself derives from ``ValueError`` so callers that only care about
"bad input or bad stream" can catch the builtin.

Nothing here is retried: compression and decompression are deterministic,
CPU-only computations, so the first error is final.
"""


def _tag_text(raw: bytes, placeholder: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return placeholder


class BiolepticError(ValueError):
    """Base class for all codec errors."""


class InvalidCompressionMethod(BiolepticError):
    """Method tag (or method name) is not one of the known transforms."""

    def __init__(self, tag):
        self.tag = tag
        if isinstance(tag, bytes):
            text = _tag_text(tag, "????")
        else:
            text = str(tag)
        super().__init__(f"Invalid compression method '{text}'")


class InvalidMagic(BiolepticError):
    def __init__(self, magic: bytes):
        self.magic = magic
        super().__init__(
            f"Magic should be 'BILP' but it was '{_tag_text(magic, '????')}'"
        )


class InvalidDataType(BiolepticError):
    def __init__(self, tag: bytes):
        self.tag = tag
        super().__init__(f"Invalid data type '{_tag_text(tag, '??')}'")


class InvalidVersion(BiolepticError):
    def __init__(self, version: bytes):
        self.version = version
        super().__init__(f"Invalid header version {version!r}")


class InvalidHeader(BiolepticError):
    """Header is too short or carries non-finite normalization statistics."""

    def __init__(self, reason: str = "Header is invalid"):
        self.reason = reason
        super().__init__(reason)


class InvalidQuantizationScale(BiolepticError):
    def __init__(self, scale):
        self.scale = scale
        super().__init__(f"Only scales 6..12 are supported, but it was {scale}")


class UnderlyingDwtError(BiolepticError):
    """The wavelet transform engine failed or returned an impossible result."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class UnderlyingCompressorError(BiolepticError):
    """The entropy coder failed to encode the packed coefficients."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class OutOfMemoryError(BiolepticError):
    def __init__(self, requested_size: int):
        self.requested_size = requested_size
        super().__init__(
            f"Out of memory, can't allocate additional {requested_size}"
        )


class UnsupportedCompressorConfiguration(BiolepticError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Unsupported compression configuration '{reason}'")


class DecompressionError(BiolepticError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Can't decompress data, reason: {reason}")


__all__ = [
    "BiolepticError",
    "InvalidCompressionMethod",
    "InvalidMagic",
    "InvalidDataType",
    "InvalidVersion",
    "InvalidHeader",
    "InvalidQuantizationScale",
    "UnderlyingDwtError",
    "UnderlyingCompressorError",
    "OutOfMemoryError",
    "UnsupportedCompressorConfiguration",
    "DecompressionError",
]
