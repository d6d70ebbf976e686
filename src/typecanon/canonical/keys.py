"""Structural key derivation for type definitions.

A structural key identifies the *shape* of a type: its fields (in declared
order, with every attribute) and, recursively, the shapes of every type it
references. Original type names never enter the key, so two catalogs that
declare the same graph under different names produce equal keys.
"""

from typecanon.errors import CyclicDefinitionError
from typecanon.models import Catalog, TypeDefinition
from typecanon.transitive import transitive_subset
from typecanon.utils import calculate_string_sha256, canonical_json

__all__ = ["StructuralKeyBuilder", "structural_key"]


class StructuralKeyBuilder:
    """Memoizing structural key builder bound to one catalog.

    Attributes
    ----------
    catalog : Catalog
        Catalog the keys are derived against.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self._keys: dict[str, str] = {}
        self._digests: dict[str, str] = {}

    def key(self, type_name: str) -> str:
        """Return the structural key of ``type_name``.

        Parameters
        ----------
        type_name : str
            Type to derive the key for.

        Returns
        -------
        str
            Newline-joined serialization of the type's own fields, with every
            complex reference replaced by the digest of the referenced type's
            key.

        Raises
        ------
        MissingDefinitionError
            If ``type_name`` or any type it transitively references is absent.
        CyclicDefinitionError
            If the closure of ``type_name`` contains a reference cycle.
        """
        if type_name not in self._keys:
            closure = transitive_subset(self.catalog, [type_name])
            self._derive(type_name, closure, ())
        return self._keys[type_name]

    def digest(self, type_name: str) -> str:
        """Return the sha256 digest of the structural key of ``type_name``."""
        self.key(type_name)
        return self._digests[type_name]

    def _derive(
        self,
        type_name: str,
        closure: dict[str, TypeDefinition],
        path: tuple[str, ...],
    ) -> None:
        if type_name in self._keys:
            return
        if type_name in path:
            cycle = path[path.index(type_name) :] + (type_name,)
            raise CyclicDefinitionError(cycle)

        definition = closure[type_name]
        lines = []
        for field in definition.fields:
            data = field.to_dict()
            if field.is_complex:
                self._derive(field.type, closure, path + (type_name,))
                data["type"] = self._digests[field.type]
            lines.append(canonical_json(data))

        key = "\n".join(lines)
        self._keys[type_name] = key
        self._digests[type_name] = calculate_string_sha256(key)


def structural_key(catalog: Catalog, type_name: str) -> str:
    """Return the structural key of ``type_name`` within ``catalog``.

    Convenience wrapper around :class:`StructuralKeyBuilder` for one-off use.
    """
    return StructuralKeyBuilder(catalog).key(type_name)
