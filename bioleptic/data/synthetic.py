"""Synthetic test signals.

Includes:
  - A PPG-like waveform (systolic peak, dicrotic notch, diastolic peak)
  - Band-limited sine mixtures for fidelity checks
"""

import numpy as np


def _gaussian(x: np.ndarray, mean: float, std: float) -> np.ndarray:
    return np.exp(-((x - mean) ** 2) / (2.0 * std ** 2))


def pseudo_noise(n: int) -> np.ndarray:
    """Deterministic noise in [-1, 1] from a 32-bit LCG over the sample index."""
    i = np.arange(n, dtype=np.uint64)
    x = (i * np.uint64(1664525) + np.uint64(1013904223)) & np.uint64(0xFFFFFFFF)
    return (x.astype(np.float64) / float(0xFFFFFFFF)) * 2.0 - 1.0


def generate_ppg(
    samples: int,
    sample_rate: float = 120.0,
    heart_rate_bpm: float = 90.0,
    amplitude: float = 3500.0,
) -> np.ndarray:
    """Generate a synthetic photoplethysmogram.

    Each beat is a fast systolic Gaussian at 25% of the cycle, a small
    dicrotic dip at 45% and a diastolic bump at 55%, on top of a 0.3 Hz
    respiration baseline and low-level deterministic noise.

    Returns:
        float32 array of ``samples`` values.
    """
    rr_interval = 60.0 / heart_rate_bpm
    t = np.arange(samples, dtype=np.float64) / sample_rate
    phase = np.mod(t / rr_interval, 1.0)

    systolic = 1.0 * _gaussian(phase, 0.25, 0.06)
    notch = -0.08 * _gaussian(phase, 0.45, 0.02)
    diastolic = 0.15 * _gaussian(phase, 0.55, 0.04)
    baseline = 0.03 * np.sin(2.0 * np.pi * 0.3 * t)
    noise = 0.005 * pseudo_noise(samples)

    signal = (systolic + notch + diastolic + baseline + noise) * amplitude
    return signal.astype(np.float32)


def generate_sine_mixture(
    samples: int,
    sample_rate: float = 250.0,
    frequencies=(1.0, 2.5, 7.0),
    amplitudes=(1.0, 0.5, 0.2),
    seed: int = 42,
) -> np.ndarray:
    """Sum of sines with random phases; band-limited by construction."""
    rng = np.random.RandomState(seed)
    t = np.arange(samples, dtype=np.float64) / sample_rate
    signal = np.zeros(samples, dtype=np.float64)
    for freq, amp in zip(frequencies, amplitudes):
        signal += amp * np.sin(2.0 * np.pi * freq * t + rng.uniform(0, 2 * np.pi))
    return signal.astype(np.float32)
