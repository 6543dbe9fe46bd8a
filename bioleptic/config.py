"""Compression options and the closed enumerations they are built from."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from .errors import InvalidCompressionMethod, InvalidQuantizationScale


class CompressionMethod(Enum):
    """Wavelet family used for the multi-level decomposition.

    The value is the 4-byte tag written to the stream header.
    """

    CDF53 = b"cf53"
    CDF97 = b"cf97"
    DB4 = b"db04"
    SYM4 = b"sym4"

    @property
    def tag(self) -> bytes:
        return self.value

    @classmethod
    def from_tag(cls, tag: bytes) -> "CompressionMethod":
        for method in cls:
            if method.value == tag:
                return method
        raise InvalidCompressionMethod(bytes(tag))

    @classmethod
    def from_name(cls, name: str) -> "CompressionMethod":
        try:
            return _METHOD_NAMES[name.lower()]
        except KeyError:
            raise InvalidCompressionMethod(name) from None


_METHOD_NAMES = {
    "cdf53": CompressionMethod.CDF53,
    "cdf97": CompressionMethod.CDF97,
    "db4": CompressionMethod.DB4,
    "sym4": CompressionMethod.SYM4,
}


class DataType(Enum):
    """Sample type of the original signal (2-byte header tag)."""

    FLOAT32 = b"f3"

    @property
    def tag(self) -> bytes:
        return self.value


class CutoffLevel(Enum):
    """How aggressively small detail coefficients are zeroed."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def factor(self) -> int:
        if self is CutoffLevel.LOW:
            return 1
        if self is CutoffLevel.MEDIUM:
            return 3
        return 7


class QuantizationScale(IntEnum):
    """Power-of-two exponent applied to coefficients before int16 conversion."""

    S6 = 6
    S7 = 7
    S8 = 8
    S9 = 9
    S10 = 10
    S11 = 11
    S12 = 12

    @classmethod
    def from_value(cls, value: int) -> "QuantizationScale":
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise InvalidQuantizationScale(value) from None

    @property
    def multiplier(self) -> float:
        return float(1 << int(self))

    @property
    def base_threshold(self) -> int:
        return _BASE_THRESHOLDS[self]


_BASE_THRESHOLDS = {
    QuantizationScale.S6: 1,
    QuantizationScale.S7: 1,
    QuantizationScale.S8: 2,
    QuantizationScale.S9: 2,
    QuantizationScale.S10: 3,
    QuantizationScale.S11: 3,
    QuantizationScale.S12: 4,
}


@dataclass
class CompressionOptions:
    """Codec configuration.

    ``method`` and ``cutoff_level`` also accept their short names
    (``"cdf97"``, ``"sym4"``, ``"medium"``...) and ``scale`` accepts a
    plain int; everything is normalized to the enums on construction.
    """

    method: Union[CompressionMethod, str] = CompressionMethod.CDF97
    scale: Union[QuantizationScale, int] = QuantizationScale.S11
    cutoff_level: Union[CutoffLevel, str] = CutoffLevel.LOW

    def __post_init__(self):
        if not isinstance(self.method, CompressionMethod):
            self.method = CompressionMethod.from_name(str(self.method))
        if not isinstance(self.scale, QuantizationScale):
            self.scale = QuantizationScale.from_value(self.scale)
        if not isinstance(self.cutoff_level, CutoffLevel):
            try:
                self.cutoff_level = CutoffLevel(str(self.cutoff_level).lower())
            except ValueError:
                raise ValueError(
                    f"Unknown cutoff level {self.cutoff_level!r}. "
                    f"Choose from: {[c.value for c in CutoffLevel]}"
                ) from None

    @classmethod
    def from_method(cls, method) -> "CompressionOptions":
        return cls(method=method)

    @property
    def threshold(self) -> int:
        """Magnitude below which quantized detail coefficients are zeroed."""
        return self.scale.base_threshold * self.cutoff_level.factor
