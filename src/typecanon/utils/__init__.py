"""Common utility functions for typecanon.

This module consolidates shared hashing, serialization and timestamp helpers.
"""

from typecanon.utils.hashing import (
    calculate_file_sha256,
    calculate_string_sha256,
    canonical_json,
    format_sha256,
)
from typecanon.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_sha256",
    "calculate_string_sha256",
    "canonical_json",
    "format_sha256",
]
