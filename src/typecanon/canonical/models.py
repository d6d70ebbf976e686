"""Result models for canonical renaming."""

from dataclasses import dataclass, field
from typing import Any

from typecanon.models import TypeDefinition, catalog_to_dict

__all__ = ["RenameResult", "GroupFailure", "CanonicalizationResult"]


@dataclass
class RenameResult:
    """Output of renaming one local catalog.

    Attributes
    ----------
    name_mapping : dict[str, str]
        Original local type name to canonical name.
    renamed : dict[str, TypeDefinition]
        Definitions keyed by canonical name, with complex references rewritten.
    root_name : str | None
        Canonical name of the requested root type, None if it was not declared.
    """

    name_mapping: dict[str, str]
    renamed: dict[str, TypeDefinition]
    root_name: str | None


@dataclass(frozen=True)
class GroupFailure:
    """A group of sources whose declarations could not be renamed.

    Attributes
    ----------
    source_keys : tuple[str, ...]
        Sources sharing the failing declaration.
    exception_class : str
        Name of the raised exception class.
    message : str
        Exception message.
    """

    source_keys: tuple[str, ...]
    exception_class: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_keys": list(self.source_keys),
            "exception_class": self.exception_class,
            "message": self.message,
        }


@dataclass
class CanonicalizationResult:
    """Output of canonicalizing a batch of sources.

    Attributes
    ----------
    names_by_source : dict[str, str]
        Source key to canonical root name. Unresolved and failed sources are absent.
    catalog : dict[str, TypeDefinition]
        Merged canonical catalog covering every distinct shape of the batch.
    prefix : str
        Name prefix used by this batch.
    groups_processed : int
        Number of distinct (declaration, root type) groups renamed.
    unresolved_sources : list[str]
        Sources whose root type received no canonical name.
    failed_groups : list[GroupFailure]
        Groups aborted by a missing definition or a reference cycle.
    """

    names_by_source: dict[str, str]
    catalog: dict[str, TypeDefinition]
    prefix: str
    groups_processed: int = 0
    unresolved_sources: list[str] = field(default_factory=list)
    failed_groups: list[GroupFailure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "names_by_source": dict(sorted(self.names_by_source.items())),
            "catalog": catalog_to_dict(self.catalog),
            "prefix": self.prefix,
            "groups_processed": self.groups_processed,
            "unresolved_sources": list(self.unresolved_sources),
            "failed_groups": [f.to_dict() for f in self.failed_groups],
        }
