"""Content-based canonical naming of schema graphs.

Structurally identical type graphs collapse to one generated name per batch;
structurally distinct graphs never share a name.
"""

from typecanon.canonical.batching import canonicalize_sources, group_sources_by_declaration
from typecanon.canonical.keys import StructuralKeyBuilder, structural_key
from typecanon.canonical.models import CanonicalizationResult, GroupFailure, RenameResult
from typecanon.canonical.naming import (
    BatchCounter,
    NameGenerator,
    default_batch_counter,
    reset_batch_counter,
)
from typecanon.canonical.renamer import rename_datatypes

__all__ = [
    "BatchCounter",
    "CanonicalizationResult",
    "GroupFailure",
    "NameGenerator",
    "RenameResult",
    "StructuralKeyBuilder",
    "canonicalize_sources",
    "default_batch_counter",
    "group_sources_by_declaration",
    "rename_datatypes",
    "reset_batch_counter",
    "structural_key",
]
