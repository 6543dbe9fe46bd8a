"""setup.py for Bioleptic, a lossy wavelet codec for 1-D physiological signals.

Pure Python: the wavelet transform comes from PyWavelets and the entropy
stage from zstandard, so there is no extension to compile.
"""

import os

from setuptools import find_packages, setup


def _read_version():
    """Read __version__ from the package without importing it."""
    init_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             "bioleptic", "__init__.py")
    with open(init_path, encoding="utf-8") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=", 1)[1].strip().strip("\"'")
    raise RuntimeError("Unable to find __version__ in bioleptic/__init__.py")


setup(
    name="bioleptic",
    version=_read_version(),
    description="Lossy wavelet compression for 1-D physiological signals (PPG, ECG)",
    packages=find_packages(include=["bioleptic", "bioleptic.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.22",
        "PyWavelets>=1.4",
        "zstandard>=0.19",
        "pandas>=1.5",
        "rich>=12.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "bioleptic=bioleptic.__main__:main",
        ],
    },
)
