"""Rename the types of one local catalog to content-based canonical names."""

from typecanon.canonical.keys import StructuralKeyBuilder
from typecanon.canonical.models import RenameResult
from typecanon.canonical.naming import NameGenerator
from typecanon.models import Catalog, TypeDefinition

__all__ = ["rename_datatypes"]


def rename_datatypes(
    catalog: Catalog,
    root_type: str,
    name_generator: NameGenerator,
) -> RenameResult:
    """Replace every type name in ``catalog`` with a canonical name.

    Types with the same structure get the same name; types whose fields, or
    whose children's fields, differ in any way get different names.

    Parameters
    ----------
    catalog : Catalog
        Local catalog of one source.
    root_type : str
        Root type of the source.
    name_generator : NameGenerator
        Batch-scoped generator shared by every source of the batch.

    Returns
    -------
    RenameResult
        Name mapping, renamed definitions and the root's canonical name.

    Raises
    ------
    MissingDefinitionError
        If a complex field references a type absent from ``catalog``.
    CyclicDefinitionError
        If ``catalog`` contains a reference cycle.

    Notes
    -----
    Every key is derived before the first name is requested, so a failure
    leaves ``name_generator`` untouched.
    """
    builder = StructuralKeyBuilder(catalog)
    keys = {type_name: builder.key(type_name) for type_name in sorted(catalog)}

    name_mapping = {type_name: name_generator.name_for(key) for type_name, key in keys.items()}

    renamed: dict[str, TypeDefinition] = {}
    for type_name, definition in catalog.items():
        canonical_name = name_mapping.get(type_name)
        if canonical_name is None:
            continue
        renamed[canonical_name] = TypeDefinition(
            fields=tuple(
                f.with_type(name_mapping[f.type])
                if f.is_complex and f.type in name_mapping
                else f
                for f in definition.fields
            )
        )

    return RenameResult(
        name_mapping=name_mapping,
        renamed=renamed,
        root_name=name_mapping.get(root_type),
    )
