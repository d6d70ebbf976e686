"""Schema definition data models for typecanon.

This module defines the name-indexed schema graph consumed by the closure
extractor and the canonical renamer. Type definitions never point at each
other directly: a complex field stores the *name* of the type it refers to,
and every edge of the graph is a lookup in a ``Catalog``.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "Catalog",
    "FieldDescriptor",
    "TypeDefinition",
    "ParsedDefinition",
    "Source",
    "catalog_from_dict",
    "catalog_to_dict",
]


@dataclass(frozen=True)
class FieldDescriptor:
    """A single field of a type definition.

    Attributes
    ----------
    name : str
        Field name, unique within its owning definition.
    type : str
        Referenced type name (complex fields) or primitive type tag.
    is_complex : bool
        True iff ``type`` names another definition in the catalog.
    is_array : bool
        Whether the field holds a sequence of ``type``.
    array_length : int | None
        Fixed array length, None for unbounded arrays and scalars.
    is_constant : bool
        Whether the field is a fixed constant rather than a data slot.
    value : Any
        Constant value, only meaningful when ``is_constant`` is True.
    """

    name: str
    type: str
    is_complex: bool = False
    is_array: bool = False
    array_length: int | None = None
    is_constant: bool = False
    value: Any = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "FieldDescriptor":
        """Create a field from its camelCase wire form.

        Parameters
        ----------
        data : Mapping[str, Any]
            Field dictionary, e.g. ``{"name": "x", "type": "float64"}``.

        Returns
        -------
        FieldDescriptor
            Parsed field.
        """
        return FieldDescriptor(
            name=data["name"],
            type=data["type"],
            is_complex=bool(data.get("isComplex", False)),
            is_array=bool(data.get("isArray", False)),
            array_length=data.get("arrayLength"),
            is_constant=bool(data.get("isConstant", False)),
            value=data.get("value"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to camelCase wire form.

        Optional attributes are emitted only when set, so two fields that
        describe the same slot always serialize identically.
        """
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "isComplex": self.is_complex,
            "isArray": self.is_array,
        }
        if self.array_length is not None:
            data["arrayLength"] = self.array_length
        if self.is_constant:
            data["isConstant"] = True
            data["value"] = self.value
        return data

    def with_type(self, type_name: str) -> "FieldDescriptor":
        """Return a copy of this field referring to ``type_name``."""
        return FieldDescriptor(
            name=self.name,
            type=type_name,
            is_complex=self.is_complex,
            is_array=self.is_array,
            array_length=self.array_length,
            is_constant=self.is_constant,
            value=self.value,
        )


@dataclass(frozen=True)
class TypeDefinition:
    """An ordered sequence of fields describing one named type.

    Attributes
    ----------
    fields : tuple[FieldDescriptor, ...]
        Fields in declared order. Order is significant.
    """

    fields: tuple[FieldDescriptor, ...] = ()

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "TypeDefinition":
        """Create a definition from ``{"fields": [...]}``."""
        return TypeDefinition(
            fields=tuple(FieldDescriptor.from_dict(f) for f in data.get("fields", []))
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"fields": [f.to_dict() for f in self.fields]}

    def complex_references(self) -> list[str]:
        """Return referenced type names of complex fields, in field order."""
        return [f.type for f in self.fields if f.is_complex]


# Mapping from type name to its definition. All graph edges are lookups here.
Catalog = Mapping[str, TypeDefinition]


def catalog_from_dict(data: Mapping[str, Mapping[str, Any]]) -> dict[str, TypeDefinition]:
    """Build a catalog from ``{TypeName: {"fields": [...]}}``."""
    return {name: TypeDefinition.from_dict(value) for name, value in data.items()}


def catalog_to_dict(catalog: Catalog) -> dict[str, dict[str, Any]]:
    """Convert a catalog to plain dictionaries, sorted by type name."""
    return {name: catalog[name].to_dict() for name in sorted(catalog)}


@dataclass(frozen=True)
class ParsedDefinition:
    """One declaration produced by the upstream schema parser.

    Attributes
    ----------
    name : str | None
        Declared type name. The unnamed declaration is the source's root type.
    definitions : tuple[FieldDescriptor, ...]
        Parsed fields of the declaration.
    """

    name: str | None
    definitions: tuple[FieldDescriptor, ...]

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "ParsedDefinition":
        """Create from ``{"name": ..., "definitions": [...]}``."""
        return ParsedDefinition(
            name=data.get("name"),
            definitions=tuple(FieldDescriptor.from_dict(f) for f in data.get("definitions", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"definitions": [f.to_dict() for f in self.definitions]}
        if self.name is not None:
            data["name"] = self.name
        return data


@dataclass(frozen=True)
class Source:
    """One external declaration unit, such as a topic.

    Attributes
    ----------
    source_key : str
        Identifier of the source (e.g. a topic name).
    parsed_definitions : tuple[ParsedDefinition, ...]
        Already-parsed declarations of this source.
    root_type : str | None
        Name of the source's root type. Unnamed declarations take this name.
    raw_declaration : str | None
        Original schema text, used only to group identical sources.
    """

    source_key: str
    parsed_definitions: tuple[ParsedDefinition, ...] = ()
    root_type: str | None = None
    raw_declaration: str | None = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Source":
        """Create from the camelCase source record of an input batch."""
        return Source(
            source_key=data["sourceKey"],
            parsed_definitions=tuple(
                ParsedDefinition.from_dict(d) for d in data.get("parsedDefinitions", [])
            ),
            root_type=data.get("rootType"),
            raw_declaration=data.get("rawDeclaration"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "sourceKey": self.source_key,
            "parsedDefinitions": [d.to_dict() for d in self.parsed_definitions],
        }
        if self.root_type is not None:
            data["rootType"] = self.root_type
        if self.raw_declaration is not None:
            data["rawDeclaration"] = self.raw_declaration
        return data

    def declaration_key(self) -> str:
        """Return the text used to group sources sharing a declaration.

        The raw declaration when present, otherwise the canonical JSON of the
        parsed declarations.
        """
        if self.raw_declaration is not None:
            return self.raw_declaration
        return json.dumps(
            [d.to_dict() for d in self.parsed_definitions],
            sort_keys=True,
            separators=(",", ":"),
        )

    def local_catalog(self) -> dict[str, TypeDefinition]:
        """Build the catalog declared by this source.

        Unnamed declarations are registered under ``root_type``. Declarations
        with neither a name nor a root type are dropped.
        """
        catalog: dict[str, TypeDefinition] = {}
        for parsed in self.parsed_definitions:
            type_name = parsed.name if parsed.name is not None else self.root_type
            if type_name is None:
                continue
            catalog[type_name] = TypeDefinition(fields=parsed.definitions)
        return catalog
