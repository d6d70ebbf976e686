"""Shared data types for typecanon.

This package contains the schema graph dataclasses consumed across the
closure extractor and the canonical renamer.

Domain-specific types live closer to their consumers:
- Audit types → typecanon.audit.models
- Renaming results → typecanon.canonical.models
"""

from typecanon.models.definitions import (
    Catalog,
    FieldDescriptor,
    ParsedDefinition,
    Source,
    TypeDefinition,
    catalog_from_dict,
    catalog_to_dict,
)

__all__ = [
    "Catalog",
    "FieldDescriptor",
    "TypeDefinition",
    "ParsedDefinition",
    "Source",
    "catalog_from_dict",
    "catalog_to_dict",
]
