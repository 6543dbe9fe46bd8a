"""Tests for the top-level bioleptic API, file helpers and CLI."""

import numpy as np
import pandas as pd
import pytest

import bioleptic
from bioleptic.__main__ import main
from bioleptic.data.synthetic import generate_ppg
from bioleptic.evaluation.metrics import prd


@pytest.fixture
def ppg():
    return generate_ppg(3000)


class TestTopLevel:
    def test_roundtrip(self, ppg):
        """bioleptic.compress / bioleptic.decompress are the codec entry points."""
        stream = bioleptic.compress(ppg)
        assert stream[:4] == bioleptic.BIOLEPTIC_MAGIC
        recovered = bioleptic.decompress(stream)
        assert recovered.dtype == np.float32
        assert prd(ppg, recovered) < 0.5

    def test_options(self, ppg):
        options = bioleptic.CompressionOptions("db4", 9, "medium")
        header = bioleptic.read_header(bioleptic.compress(ppg, options))
        assert header.compression_method_enum() is bioleptic.CompressionMethod.DB4
        assert header.quantization_scale() is bioleptic.QuantizationScale.S9

    def test_errors_exported(self):
        with pytest.raises(bioleptic.BiolepticError):
            bioleptic.decompress(b"BILP")
        with pytest.raises(bioleptic.UnsupportedCompressorConfiguration):
            bioleptic.compress([])

    def test_version(self):
        assert isinstance(bioleptic.__version__, str)


class TestFileHelpers:
    @pytest.mark.parametrize("suffix", [".npy", ".csv", ".tsv", ".f32"])
    def test_file_roundtrip(self, tmp_path, ppg, suffix):
        src = tmp_path / f"signal{suffix}"
        bioleptic.save_signal(ppg, str(src))
        np.testing.assert_allclose(bioleptic.load_signal(str(src)), ppg, rtol=1e-6)

        stats = bioleptic.compress_file(str(src), str(tmp_path / "signal.bilp"))
        assert stats["n_samples"] == ppg.size
        assert stats["raw_bytes"] == ppg.nbytes
        assert stats["compressed_bytes"] == (tmp_path / "signal.bilp").stat().st_size
        assert stats["ratio"] > 1.0
        assert stats["method"] == "CDF97"

        out = tmp_path / f"restored{suffix}"
        dstats = bioleptic.decompress_file(str(tmp_path / "signal.bilp"), str(out))
        assert dstats["n_samples"] == ppg.size
        assert dstats["dtype"] == "float32"
        assert prd(ppg, bioleptic.load_signal(str(out))) < 0.5

    def test_csv_first_numeric_column(self, tmp_path):
        """Text inputs use the first numeric column and skip labels."""
        path = tmp_path / "labeled.csv"
        pd.DataFrame({
            "label": ["a", "b", "c"],
            "value": [1.5, 2.5, 3.5],
            "other": [9.0, 9.0, 9.0],
        }).to_csv(path, index=False)
        np.testing.assert_array_equal(bioleptic.load_signal(str(path)), [1.5, 2.5, 3.5])

    def test_csv_without_numbers(self, tmp_path):
        path = tmp_path / "words.csv"
        pd.DataFrame({"label": ["a", "b"]}).to_csv(path, index=False)
        with pytest.raises(ValueError, match="numeric"):
            bioleptic.load_signal(str(path))

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported input format"):
            bioleptic.load_signal(str(tmp_path / "signal.wav"))

    def test_options_in_stats(self, tmp_path, ppg):
        np.save(tmp_path / "in.npy", ppg)
        options = bioleptic.CompressionOptions("sym4", 12, "high")
        stats = bioleptic.compress_file(str(tmp_path / "in.npy"), str(tmp_path / "out.bilp"), options)
        assert stats["method"] == "SYM4"
        assert stats["scale"] == 12
        assert stats["cutoff_level"] == "high"


class TestCli:
    def test_compress_decompress(self, tmp_path, ppg):
        np.save(tmp_path / "in.npy", ppg)
        packed = tmp_path / "out.bilp"
        restored = tmp_path / "restored.npy"

        assert main(["compress", str(tmp_path / "in.npy"), "-o", str(packed),
                     "-m", "sym4", "-s", "10", "-c", "medium"]) == 0
        header = bioleptic.read_header(packed.read_bytes())
        assert header.compression_method == b"sym4"
        assert header.scale == 10

        assert main(["decompress", str(packed), "-o", str(restored)]) == 0
        assert np.load(restored).shape == ppg.shape

    def test_info(self, tmp_path, ppg):
        packed = tmp_path / "out.bilp"
        packed.write_bytes(bioleptic.compress(ppg))
        assert main(["info", str(packed)]) == 0

    def test_info_bad_file(self, tmp_path):
        bad = tmp_path / "bad.bilp"
        bad.write_bytes(b"not a bioleptic stream at all, definitely not" * 2)
        assert main(["info", str(bad)]) == 1

    def test_missing_input(self, tmp_path):
        assert main(["compress", str(tmp_path / "nope.npy"), "-o", str(tmp_path / "x")]) == 1

    def test_invalid_scale(self, tmp_path, ppg):
        np.save(tmp_path / "in.npy", ppg)
        assert main(["compress", str(tmp_path / "in.npy"), "-o", str(tmp_path / "x"),
                     "-s", "14"]) == 1

    def test_tryit(self, tmp_path, ppg):
        np.save(tmp_path / "in.npy", ppg[:500])
        assert main(["tryit", str(tmp_path / "in.npy"), "-s", "8", "11"]) == 0

    def test_no_command(self):
        assert main([]) == 0
