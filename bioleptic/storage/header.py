"""Binary stream header: the fixed 52-byte record in front of every payload.

HEADER (52 bytes fixed, little-endian):
    offset  size  field
    0       4     magic            b'BILP'
    4       2     version          uint16, currently 1
    6       2     data_type        2-byte tag, b'f3' = float32
    8       4     method           4-byte tag: b'cf53', b'cf97', b'db04', b'sym4'
    12      1     levels           uint8, DWT levels used (1..10)
    13      1     scale            uint8, quantization exponent (6..12)
    14      2     reserved0        zero
    16      4     signal_length    uint32, original sample count
    20      4     min              float32 bit pattern, post-substitution minimum
    24      4     max              float32 bit pattern, post-substitution maximum
    28      4     mean             float32 bit pattern, post-normalization mean
    32      4     compressed_size  uint32, payload bytes following the header
    36      16    reserved1        zero

PAYLOAD:
    compressed_size bytes of zstd-coded little-endian int16 coefficients.

Fields are packed one by one at their fixed offsets rather than through a
single struct format string, so the layout above is the only source of
truth for the byte positions.
"""

import math
import struct
from dataclasses import dataclass
from typing import Union

from ..config import CompressionMethod, DataType, QuantizationScale
from ..errors import (
    InvalidDataType,
    InvalidHeader,
    InvalidMagic,
    InvalidVersion,
)

BIOLEPTIC_MAGIC = b"BILP"
BIOLEPTIC_VERSION = 1
BIOLEPTIC_HEADER_SIZE = 52

_VERSION_OFFSET = 4
_DATA_TYPE_OFFSET = 6
_METHOD_OFFSET = 8
_LEVELS_OFFSET = 12
_SCALE_OFFSET = 13
_RESERVED0_OFFSET = 14
_SIGNAL_LENGTH_OFFSET = 16
_MIN_OFFSET = 20
_MAX_OFFSET = 24
_MEAN_OFFSET = 28
_COMPRESSED_SIZE_OFFSET = 32
_RESERVED1_OFFSET = 36


def f32_to_bits(value: float) -> int:
    """Bit pattern of ``value`` rounded to float32, as an unsigned int."""
    return struct.unpack("<I", struct.pack("<f", value))[0]


def bits_to_f32(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits))[0]


@dataclass
class BiolepticHeader:
    """Parsed stream header.

    ``min``, ``max`` and ``mean`` hold raw float32 bit patterns so that
    ``decode(encode(h)) == h`` compares bit-exactly; use the ``*_f32``
    accessors for the float values. ``scale`` is kept as the raw byte
    because parsing does not range-check it.
    """

    data_type: bytes
    compression_method: bytes
    levels: int
    scale: int
    signal_length: int
    min: int
    max: int
    mean: int
    compressed_size: int
    magic: bytes = BIOLEPTIC_MAGIC
    version: int = BIOLEPTIC_VERSION

    @classmethod
    def new(
        cls,
        data_type: DataType,
        method: CompressionMethod,
        levels: int,
        scale: QuantizationScale,
        signal_length: int,
        min: float,
        max: float,
        mean: float,
        compressed_size: int,
    ) -> "BiolepticHeader":
        """Build a header with the current magic and version."""
        return cls(
            data_type=data_type.tag,
            compression_method=method.tag,
            levels=levels,
            scale=int(scale),
            signal_length=signal_length,
            min=f32_to_bits(min),
            max=f32_to_bits(max),
            mean=f32_to_bits(mean),
            compressed_size=compressed_size,
        )

    @property
    def min_f32(self) -> float:
        return bits_to_f32(self.min)

    @property
    def max_f32(self) -> float:
        return bits_to_f32(self.max)

    @property
    def mean_f32(self) -> float:
        return bits_to_f32(self.mean)

    def compression_method_enum(self) -> CompressionMethod:
        return CompressionMethod.from_tag(self.compression_method)

    def data_type_enum(self) -> DataType:
        for data_type in DataType:
            if data_type.tag == self.data_type:
                return data_type
        raise InvalidDataType(self.data_type)

    def quantization_scale(self) -> QuantizationScale:
        return QuantizationScale.from_value(self.scale)

    def to_bytes(self) -> bytes:
        buf = bytearray(BIOLEPTIC_HEADER_SIZE)
        buf[0:4] = self.magic
        struct.pack_into("<H", buf, _VERSION_OFFSET, self.version)
        buf[_DATA_TYPE_OFFSET:_DATA_TYPE_OFFSET + 2] = self.data_type
        buf[_METHOD_OFFSET:_METHOD_OFFSET + 4] = self.compression_method
        struct.pack_into("<B", buf, _LEVELS_OFFSET, self.levels)
        struct.pack_into("<B", buf, _SCALE_OFFSET, self.scale)
        buf[_RESERVED0_OFFSET:_SIGNAL_LENGTH_OFFSET] = bytes(2)
        struct.pack_into("<I", buf, _SIGNAL_LENGTH_OFFSET, self.signal_length)
        struct.pack_into("<I", buf, _MIN_OFFSET, self.min)
        struct.pack_into("<I", buf, _MAX_OFFSET, self.max)
        struct.pack_into("<I", buf, _MEAN_OFFSET, self.mean)
        struct.pack_into("<I", buf, _COMPRESSED_SIZE_OFFSET, self.compressed_size)
        buf[_RESERVED1_OFFSET:BIOLEPTIC_HEADER_SIZE] = bytes(16)
        return bytes(buf)

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> "BiolepticHeader":
        """Parse and validate the first 52 bytes of ``data``.

        Raises:
            InvalidHeader: fewer than 52 bytes, or non-finite min/max/mean.
            InvalidMagic, InvalidVersion, InvalidDataType,
            InvalidCompressionMethod: unknown identification fields.

        The scale byte is carried through unchecked; the decompressor
        validates it before use.
        """
        if len(data) < BIOLEPTIC_HEADER_SIZE:
            raise InvalidHeader(
                f"Header needs {BIOLEPTIC_HEADER_SIZE} bytes but only "
                f"{len(data)} were given"
            )
        buf = bytes(data[:BIOLEPTIC_HEADER_SIZE])

        magic = buf[0:4]
        if magic != BIOLEPTIC_MAGIC:
            raise InvalidMagic(magic)

        (version,) = struct.unpack_from("<H", buf, _VERSION_OFFSET)
        if version != BIOLEPTIC_VERSION:
            raise InvalidVersion(buf[_VERSION_OFFSET:_VERSION_OFFSET + 2])

        data_type = buf[_DATA_TYPE_OFFSET:_DATA_TYPE_OFFSET + 2]
        method = buf[_METHOD_OFFSET:_METHOD_OFFSET + 4]

        header = cls(
            magic=magic,
            version=version,
            data_type=data_type,
            compression_method=method,
            levels=buf[_LEVELS_OFFSET],
            scale=buf[_SCALE_OFFSET],
            signal_length=struct.unpack_from("<I", buf, _SIGNAL_LENGTH_OFFSET)[0],
            min=struct.unpack_from("<I", buf, _MIN_OFFSET)[0],
            max=struct.unpack_from("<I", buf, _MAX_OFFSET)[0],
            mean=struct.unpack_from("<I", buf, _MEAN_OFFSET)[0],
            compressed_size=struct.unpack_from("<I", buf, _COMPRESSED_SIZE_OFFSET)[0],
        )

        data_type_enum = header.data_type_enum()
        header.compression_method_enum()

        if data_type_enum is DataType.FLOAT32:
            for name, value in (
                ("min", header.min_f32),
                ("max", header.max_f32),
                ("mean", header.mean_f32),
            ):
                if not math.isfinite(value):
                    raise InvalidHeader(f"Header {name} is not finite: {value}")

        return header

    def __repr__(self) -> str:
        try:
            method = self.compression_method_enum().name
        except ValueError:
            method = repr(self.compression_method)
        return (
            f"BiolepticHeader(magic={self.magic!r}, version={self.version}, "
            f"data_type={self.data_type!r}, compression_method={method}, "
            f"levels={self.levels}, scale={self.scale}, "
            f"signal_length={self.signal_length}, min={self.min_f32}, "
            f"max={self.max_f32}, mean={self.mean_f32}, "
            f"compressed_size={self.compressed_size})"
        )
