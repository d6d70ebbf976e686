"""Exception hierarchy for typecanon."""

__all__ = [
    "TypecanonError",
    "MissingDefinitionError",
    "CyclicDefinitionError",
    "InputValidationError",
]


class TypecanonError(Exception):
    """Base class for all typecanon errors."""


class MissingDefinitionError(TypecanonError):
    """Raised when a referenced type name is absent from the catalog.

    Attributes
    ----------
    type_name : str
        The type name that could not be resolved.
    """

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Definition missing for type {type_name}")
        self.type_name = type_name


class CyclicDefinitionError(TypecanonError):
    """Raised when a structural key cannot be derived because of a reference cycle.

    Attributes
    ----------
    cycle : tuple[str, ...]
        Type names forming the cycle, starting and ending with the same name.
    """

    def __init__(self, cycle: tuple[str, ...]) -> None:
        super().__init__(f"Reference cycle between types: {' -> '.join(cycle)}")
        self.cycle = cycle


class InputValidationError(TypecanonError):
    """Raised when an input document does not match its JSON Schema.

    Attributes
    ----------
    path : str | None
        File the document was read from.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
