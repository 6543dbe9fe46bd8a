from .metrics import (
    compression_ratio,
    evaluate_roundtrip,
    prd,
    reconstruction_rmse,
    zeroed_detail_count,
)

__all__ = [
    "compression_ratio",
    "evaluate_roundtrip",
    "prd",
    "reconstruction_rmse",
    "zeroed_detail_count",
]
