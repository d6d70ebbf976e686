"""Content-based canonical naming across a batch of sources.

Parsing and renaming message definitions is expensive, but sources often share
the exact same declaration. Sources are therefore grouped by declaration and
each group is renamed once; the resulting root name is copied to every source
in the group.
"""

from collections.abc import Iterable

from typecanon.audit.logger import AuditLogger
from typecanon.canonical.models import CanonicalizationResult, GroupFailure
from typecanon.canonical.naming import BatchCounter, NameGenerator, default_batch_counter
from typecanon.canonical.renamer import rename_datatypes
from typecanon.errors import CyclicDefinitionError, MissingDefinitionError
from typecanon.models import Source, TypeDefinition

__all__ = ["canonicalize_sources", "group_sources_by_declaration"]

_STAGE = "canonicalize"


def group_sources_by_declaration(
    sources: Iterable[Source],
) -> dict[tuple[str, str | None], list[Source]]:
    """Group sources sharing a declaration and a root type.

    Parameters
    ----------
    sources : Iterable[Source]
        Sources in input order.

    Returns
    -------
    dict[tuple[str, str | None], list[Source]]
        ``(declaration key, root type)`` to member sources, in order of first
        appearance. The root type is part of the group key because it names
        the unnamed declaration.
    """
    groups: dict[tuple[str, str | None], list[Source]] = {}
    for source in sources:
        group_key = (source.declaration_key(), source.root_type)
        groups.setdefault(group_key, []).append(source)
    return groups


def canonicalize_sources(
    sources: Iterable[Source],
    *,
    batch_counter: BatchCounter | None = None,
    name_generator: NameGenerator | None = None,
    strict: bool = False,
    logger: AuditLogger | None = None,
) -> CanonicalizationResult:
    """Replace all type names with names that depend only on structure.

    If two sources declare types with the same fields they get the same
    name. If the fields differ, even in a child type, the names differ.

    Parameters
    ----------
    sources : Iterable[Source]
        Sources of the batch.
    batch_counter : BatchCounter | None, optional
        Counter providing the batch prefix. Defaults to the process-wide one.
    name_generator : NameGenerator | None, optional
        Explicit generator for this batch. Takes precedence over
        ``batch_counter``.
    strict : bool, optional
        Re-raise group failures instead of isolating them, by default False.
    logger : AuditLogger | None, optional
        Audit logger for batch events. If None, no logging.

    Returns
    -------
    CanonicalizationResult
        Root names by source and the merged canonical catalog.

    Raises
    ------
    MissingDefinitionError, CyclicDefinitionError
        Only when ``strict`` is True.
    """
    if name_generator is None:
        counter = batch_counter if batch_counter is not None else default_batch_counter()
        name_generator = counter.new_generator()

    source_list = list(sources)
    groups = group_sources_by_declaration(source_list)

    if logger:
        logger.event(
            "batch_started",
            stage=_STAGE,
            data={
                "prefix": name_generator.prefix,
                "sources": len(source_list),
                "groups": len(groups),
            },
        )

    names_by_source: dict[str, str] = {}
    catalog: dict[str, TypeDefinition] = {}
    unresolved: list[str] = []
    failures: list[GroupFailure] = []
    groups_processed = 0

    for (_, root_type), members in groups.items():
        member_keys = tuple(s.source_key for s in members)

        if root_type is None:
            unresolved.extend(member_keys)
            continue

        try:
            result = rename_datatypes(members[0].local_catalog(), root_type, name_generator)
        except (MissingDefinitionError, CyclicDefinitionError) as e:
            if strict:
                raise
            failures.append(
                GroupFailure(
                    source_keys=member_keys,
                    exception_class=type(e).__name__,
                    message=str(e),
                )
            )
            if logger:
                logger.event(
                    "group_failed",
                    stage=_STAGE,
                    level="ERROR",
                    data={
                        "source_keys": list(member_keys),
                        "exception_class": type(e).__name__,
                        "message": str(e),
                    },
                )
            continue

        groups_processed += 1

        if result.root_name is None:
            unresolved.extend(member_keys)
            continue

        catalog.update(result.renamed)
        for key in member_keys:
            names_by_source[key] = result.root_name

        if logger:
            logger.event(
                "group_processed",
                stage=_STAGE,
                data={
                    "source_keys": list(member_keys),
                    "root_type": root_type,
                    "root_name": result.root_name,
                    "types": len(result.name_mapping),
                },
            )

    if logger:
        for key in unresolved:
            logger.event(
                "source_unresolved",
                stage=_STAGE,
                level="WARN",
                data={"source_key": key},
            )
        logger.event(
            "batch_finished",
            stage=_STAGE,
            data={
                "resolved_sources": len(names_by_source),
                "unresolved_sources": len(unresolved),
                "failed_groups": len(failures),
                "canonical_types": len(catalog),
            },
        )

    return CanonicalizationResult(
        names_by_source=names_by_source,
        catalog=catalog,
        prefix=name_generator.prefix,
        groups_processed=groups_processed,
        unresolved_sources=sorted(unresolved),
        failed_groups=failures,
    )
