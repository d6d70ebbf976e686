"""Transitive closure and content-based canonical naming for schema graphs.

This package provides:
- Data models (typecanon.models) — fields, type definitions, sources
- Closure (typecanon.transitive) — transitive subset extraction
- Canonical naming (typecanon.canonical) — structural keys and deduplicated names
- I/O (typecanon.io) — schema-validated JSON loading and writing
- Engine (typecanon.engine) — file-based run orchestration
- Audit (typecanon.audit) — JSONL event logging
- CLI (typecanon.cli) — command-line interface
- Public API (typecanon.api) — high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from typecanon.api import (
    canonicalize,
    closure,
    content_based_datatypes,
    load_catalog,
    load_sources,
    reset_datatype_prefix_for_test,
    write_catalog,
)
from typecanon.canonical import BatchCounter, CanonicalizationResult, NameGenerator
from typecanon.errors import (
    CyclicDefinitionError,
    InputValidationError,
    MissingDefinitionError,
    TypecanonError,
)
from typecanon.models import FieldDescriptor, ParsedDefinition, Source, TypeDefinition

__all__ = [
    "__version__",
    "__license__",
    "BatchCounter",
    "CanonicalizationResult",
    "CyclicDefinitionError",
    "FieldDescriptor",
    "InputValidationError",
    "MissingDefinitionError",
    "NameGenerator",
    "ParsedDefinition",
    "Source",
    "TypeDefinition",
    "TypecanonError",
    "canonicalize",
    "closure",
    "content_based_datatypes",
    "load_catalog",
    "load_sources",
    "reset_datatype_prefix_for_test",
    "write_catalog",
]
