"""Tests for fidelity metrics and synthetic signal generators."""

import numpy as np
import pytest

from bioleptic.config import CompressionOptions
from bioleptic.data.synthetic import generate_ppg, generate_sine_mixture, pseudo_noise
from bioleptic.evaluation.metrics import (
    compression_ratio,
    evaluate_roundtrip,
    prd,
    reconstruction_rmse,
    zeroed_detail_count,
)


class TestPrd:
    def test_identical(self):
        x = np.random.RandomState(0).randn(100)
        assert prd(x, x) == 0.0

    def test_constant_original(self):
        """A zero-variance original reports 0.0 instead of dividing by zero."""
        assert prd(np.ones(10), np.zeros(10)) == 0.0

    def test_known_value(self):
        x = np.array([1.0, -1.0, 1.0, -1.0])
        y = x * 0.9
        assert prd(x, y) == pytest.approx(10.0)

    def test_mean_removed(self):
        """An offset in the original does not shrink the PRD."""
        x = np.array([1.0, -1.0, 1.0, -1.0])
        y = x * 0.9
        assert prd(x + 100.0, y + 100.0) == pytest.approx(prd(x, y))

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="mismatch"):
            prd(np.zeros(3), np.zeros(4))


class TestOtherMetrics:
    def test_rmse(self):
        assert reconstruction_rmse([0.0, 0.0], [3.0, 4.0]) == pytest.approx(np.sqrt(12.5))

    def test_compression_ratio(self):
        assert compression_ratio(1000, 250) == 4.0
        assert compression_ratio(1000, 0) == 1000.0

    def test_zeroed_detail_count(self):
        signal = generate_ppg(2000)
        low = zeroed_detail_count(signal, CompressionOptions(cutoff_level="low"))
        high = zeroed_detail_count(signal, CompressionOptions(cutoff_level="high"))
        assert low["levels"] == 5
        assert low["n_details"] == high["n_details"]
        assert low["zeroed_details"] <= high["zeroed_details"]
        assert 0.0 <= low["zeroed_fraction"] <= high["zeroed_fraction"] <= 1.0

    def test_evaluate_roundtrip(self):
        result = evaluate_roundtrip(generate_ppg(4000))
        assert result["n_samples"] == 4000
        assert result["raw_bytes"] == 16000
        assert result["ratio"] > 1.0
        assert result["prd"] < 0.5
        assert result["encode_time_sec"] >= 0.0


class TestSynthetic:
    def test_ppg_shape(self):
        data = generate_ppg(1200)
        assert data.shape == (1200,)
        assert data.dtype == np.float32

    def test_ppg_deterministic(self):
        np.testing.assert_array_equal(generate_ppg(500), generate_ppg(500))

    def test_ppg_amplitude(self):
        data = generate_ppg(2400, amplitude=1000.0)
        assert 900.0 < data.max() < 1100.0
        assert data.min() > -200.0

    def test_pseudo_noise_range(self):
        noise = pseudo_noise(10000)
        assert noise.min() >= -1.0
        assert noise.max() <= 1.0
        np.testing.assert_array_equal(noise[:100], pseudo_noise(100))

    def test_sine_mixture(self):
        data = generate_sine_mixture(1000)
        assert data.shape == (1000,)
        assert data.dtype == np.float32
        assert np.abs(data).max() <= 1.7 + 1e-6
        np.testing.assert_array_equal(data, generate_sine_mixture(1000))
        assert not np.array_equal(data, generate_sine_mixture(1000, seed=7))
