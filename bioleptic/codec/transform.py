"""Multi-level DWT engine backed by PyWavelets.

Each ``CompressionMethod`` maps to one PyWavelets filter bank:

    CDF53 -> 'bior2.2'   (CDF 5/3, LeGall)
    CDF97 -> 'bior4.4'   (CDF 9/7)
    DB4   -> 'db4'
    SYM4  -> 'sym4'

All of them run in 'periodization' mode, so every level halves its input
(rounding up) and the approximation and detail arrays of a level always
have the same length. ``dwt_size`` exposes that mapping so the decoder can
recompute the geometry from the signal length alone.
"""

import warnings
from dataclasses import dataclass
from typing import List

import numpy as np
import pywt

from ..config import CompressionMethod
from ..errors import UnderlyingDwtError

_WAVELET_NAMES = {
    CompressionMethod.CDF53: "bior2.2",
    CompressionMethod.CDF97: "bior4.4",
    CompressionMethod.DB4: "db4",
    CompressionMethod.SYM4: "sym4",
}

_BORDER_MODE = "periodization"


@dataclass(frozen=True)
class DwtSize:
    """Coefficient array lengths produced by one decomposition level."""
    approx_length: int
    details_length: int


@dataclass
class MultiLevelDwt:
    """Result of a forward transform.

    ``details`` is ordered finest-first: ``details[0]`` comes from the
    first decomposition step and ``approximation`` from the last.
    """
    approximation: np.ndarray
    details: List[np.ndarray]

    @property
    def levels(self) -> int:
        return len(self.details)


class DwtEngine:
    """Forward/inverse multi-level DWT for one wavelet family.

    Instances are cheap and hold no per-signal state; the codec builds a
    fresh one for every call.
    """

    def __init__(self, method: CompressionMethod):
        self.method = method
        self.wavelet = pywt.Wavelet(_WAVELET_NAMES[method])
        self.mode = _BORDER_MODE

    def dwt_size(self, length: int) -> DwtSize:
        n = pywt.dwt_coeff_len(length, self.wavelet.dec_len, self.mode)
        return DwtSize(approx_length=n, details_length=n)

    def level_sizes(self, signal_length: int, levels: int) -> List[DwtSize]:
        """Per-level geometry for a ``levels``-deep decomposition.

        Level 0 derives from ``signal_length``; level k from level k-1's
        approximation length.
        """
        sizes = [self.dwt_size(signal_length)]
        for _ in range(1, levels):
            sizes.append(self.dwt_size(sizes[-1].approx_length))
        return sizes

    def multi_dwt(self, signal: np.ndarray, levels: int) -> MultiLevelDwt:
        if levels < 1:
            raise UnderlyingDwtError(f"DWT level must be at least 1, got {levels}")
        try:
            with warnings.catch_warnings():
                # Short signals legitimately exceed pywt's recommended depth
                warnings.simplefilter("ignore", UserWarning)
                coeffs = pywt.wavedec(signal, self.wavelet, mode=self.mode, level=levels)
        except ValueError as exc:
            raise UnderlyingDwtError(str(exc)) from exc

        # pywt order: [cA_n, cD_n, ..., cD_1]
        approximation = coeffs[0]
        details = list(reversed(coeffs[1:]))
        return MultiLevelDwt(approximation=approximation, details=details)

    def multi_idwt(
        self,
        approximation: np.ndarray,
        details: List[np.ndarray],
        signal_length: int,
    ) -> np.ndarray:
        """Reconstruct ``signal_length`` samples from finest-first details."""
        if not details:
            raise UnderlyingDwtError("Inverse DWT needs at least one detail level")
        coeffs = [approximation] + list(reversed(details))
        try:
            signal = pywt.waverec(coeffs, self.wavelet, mode=self.mode)
        except ValueError as exc:
            raise UnderlyingDwtError(str(exc)) from exc
        if len(signal) < signal_length:
            raise UnderlyingDwtError(
                f"Inverse DWT produced {len(signal)} samples, expected {signal_length}"
            )
        # odd signal lengths come back one sample long
        return signal[:signal_length]


def make_engine(method: CompressionMethod) -> DwtEngine:
    return DwtEngine(method)

