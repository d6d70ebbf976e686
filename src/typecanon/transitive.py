"""Transitive closure extraction over a name-indexed type catalog."""

from collections.abc import Iterable

from typecanon.errors import MissingDefinitionError
from typecanon.models import Catalog, TypeDefinition

__all__ = ["transitive_subset"]


def transitive_subset(catalog: Catalog, roots: Iterable[str]) -> dict[str, TypeDefinition]:
    """Return the subset of ``catalog`` needed to fully define ``roots``.

    If ``roots`` is ``["visualization_msgs/Marker"]``, the result includes the
    definitions of ``std_msgs/Header``, ``geometry_msgs/Pose`` etc., but not
    ``visualization_msgs/MarkerArray``.

    Parameters
    ----------
    catalog : Catalog
        Universe of type definitions, keyed by type name.
    roots : Iterable[str]
        Type names to resolve.

    Returns
    -------
    dict[str, TypeDefinition]
        Every type reachable from ``roots`` through complex fields (roots
        included), mapped to its unmodified definition.

    Raises
    ------
    MissingDefinitionError
        If a root or any transitively referenced type is absent from
        ``catalog``. No partial result is returned.

    Notes
    -----
    Breadth-first search. The result map doubles as the visited set, so the
    traversal terminates on reference cycles as well as on DAGs.
    """
    # Types that will be in the result but whose children are not visited yet.
    frontier = set(roots)
    subset: dict[str, TypeDefinition] = {}

    while frontier:
        next_frontier: set[str] = set()
        for type_name in sorted(frontier):
            definition = catalog.get(type_name)
            if definition is None:
                raise MissingDefinitionError(type_name)
            subset[type_name] = definition

        for type_name in sorted(frontier):
            for child in subset[type_name].complex_references():
                if child not in subset:
                    next_frontier.add(child)

        frontier = next_frontier

    return subset
