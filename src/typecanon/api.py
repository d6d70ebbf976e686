"""Public API for typecanon.

This module provides the main public API, enabling:
- Computing the transitive subset of a catalog for a set of root types
- Canonicalizing a batch of independently declared sources
- Loading inputs from and writing results to JSON files
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from typecanon.canonical import (
    BatchCounter,
    CanonicalizationResult,
    canonicalize_sources,
    reset_batch_counter,
)
from typecanon.io import load_catalog, load_sources, write_json
from typecanon.models import Catalog, Source, TypeDefinition, catalog_to_dict
from typecanon.transitive import transitive_subset

__all__ = [
    "closure",
    "canonicalize",
    "content_based_datatypes",
    "load_catalog",
    "load_sources",
    "write_catalog",
    "reset_datatype_prefix_for_test",
]


def closure(catalog: Catalog, roots: Iterable[str]) -> dict[str, TypeDefinition]:
    """Return the smallest sub-catalog that transitively defines ``roots``.

    Parameters
    ----------
    catalog : Catalog
        Universe of type definitions.
    roots : Iterable[str]
        Requested type names.

    Returns
    -------
    dict[str, TypeDefinition]
        Reachable definitions, roots included.

    Raises
    ------
    MissingDefinitionError
        If any reachable type is absent from ``catalog``.

    Examples
    --------
        >>> from typecanon import closure, load_catalog
        >>> catalog = load_catalog("catalog.json")
        >>> sorted(closure(catalog, ["visualization_msgs/Marker"]))[:2]
        ['geometry_msgs/Point', 'geometry_msgs/Pose']
    """
    return transitive_subset(catalog, roots)


def canonicalize(
    sources: Iterable[Source | Mapping[str, Any]],
    *,
    batch_counter: BatchCounter | None = None,
    strict: bool = False,
) -> CanonicalizationResult:
    """Assign content-based canonical names to a batch of sources.

    Parameters
    ----------
    sources : Iterable[Source | Mapping[str, Any]]
        Sources, either as models or as camelCase source dictionaries.
    batch_counter : BatchCounter | None, optional
        Counter providing the batch prefix. Defaults to the process-wide one.
    strict : bool, optional
        Raise on the first failing group, by default False.

    Returns
    -------
    CanonicalizationResult
        Root names by source and the merged canonical catalog.

    Examples
    --------
        >>> from typecanon import canonicalize
        >>> result = canonicalize(load_sources("sources.json"))
        >>> result.names_by_source["/odom"]
        'f_0_3'
    """
    models = [s if isinstance(s, Source) else Source.from_dict(s) for s in sources]
    return canonicalize_sources(models, batch_counter=batch_counter, strict=strict)


def content_based_datatypes(
    raw_declarations_by_source: Mapping[str, str],
    parsed_definitions_by_source: Mapping[str, list[Mapping[str, Any]]],
    root_types_by_source: Mapping[str, str],
    *,
    batch_counter: BatchCounter | None = None,
) -> tuple[dict[str, str], dict[str, TypeDefinition]]:
    """Canonicalize sources given as three parallel per-source mappings.

    Every source with parsed definitions is considered; raw declarations and
    root types are optional per source.

    Returns
    -------
    tuple[dict[str, str], dict[str, TypeDefinition]]
        Canonical root name by source, and the merged canonical catalog.
    """
    sources = [
        Source.from_dict(
            {
                "sourceKey": source_key,
                "parsedDefinitions": list(parsed),
                "rawDeclaration": raw_declarations_by_source.get(source_key),
                "rootType": root_types_by_source.get(source_key),
            }
        )
        for source_key, parsed in parsed_definitions_by_source.items()
    ]
    result = canonicalize_sources(sources, batch_counter=batch_counter)
    return result.names_by_source, result.catalog


def write_catalog(catalog: Catalog, path: str | Path) -> Path:
    """Write a catalog as sorted ``{TypeName: {"fields": [...]}}`` JSON."""
    return write_json(catalog_to_dict(catalog), path)


def reset_datatype_prefix_for_test() -> None:
    """Zero the process-wide batch counters so generated names repeat."""
    reset_batch_counter()
