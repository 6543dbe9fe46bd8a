from .header import (
    BIOLEPTIC_HEADER_SIZE,
    BIOLEPTIC_MAGIC,
    BIOLEPTIC_VERSION,
    BiolepticHeader,
)

__all__ = [
    "BIOLEPTIC_HEADER_SIZE", "BIOLEPTIC_MAGIC", "BIOLEPTIC_VERSION",
    "BiolepticHeader",
]
