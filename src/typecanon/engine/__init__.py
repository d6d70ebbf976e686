"""Canonicalization run orchestration.

This package provides the file-based entry point used by the CLI, including
configuration and result types.
"""

from typecanon.engine.config import CanonicalizeConfig, CanonicalizeResult
from typecanon.engine.runner import run_canonicalization

__all__ = [
    "CanonicalizeConfig",
    "CanonicalizeResult",
    "run_canonicalization",
]
