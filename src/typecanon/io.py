"""JSON input/output for catalogs and source batches.

Input documents are validated against the JSON Schemas bundled in
``typecanon/schemas`` before they are turned into model objects.
"""

import json
from functools import cache
from pathlib import Path
from typing import Any

import jsonschema

from typecanon.errors import InputValidationError
from typecanon.models import Source, TypeDefinition, catalog_from_dict

__all__ = [
    "SCHEMAS_DIR",
    "load_schema",
    "validate_document",
    "parse_catalog",
    "parse_sources",
    "load_catalog",
    "load_sources",
    "write_json",
]

SCHEMAS_DIR = Path(__file__).parent / "schemas"


@cache
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON Schema by name (e.g. "catalog")."""
    with (SCHEMAS_DIR / f"{name}.schema.json").open(encoding="utf-8") as f:
        return json.load(f)


def validate_document(data: Any, schema_name: str, path: str | None = None) -> None:
    """Validate ``data`` against a bundled schema.

    Raises
    ------
    InputValidationError
        If ``data`` does not match the schema.
    """
    try:
        jsonschema.validate(instance=data, schema=load_schema(schema_name))
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        where = f" in {path}" if path else ""
        raise InputValidationError(
            f"Invalid {schema_name} document{where} at {location}: {e.message}",
            path=path,
        ) from e


def parse_catalog(data: Any, path: str | None = None) -> dict[str, TypeDefinition]:
    """Validate and convert a catalog document."""
    validate_document(data, "catalog", path)
    return catalog_from_dict(data)


def parse_sources(data: Any, path: str | None = None) -> list[Source]:
    """Validate and convert a source batch document."""
    validate_document(data, "sources", path)
    return [Source.from_dict(item) for item in data["sources"]]


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise InputValidationError(f"Malformed JSON in {path}: {e}", path=str(path)) from e


def load_catalog(path: str | Path) -> dict[str, TypeDefinition]:
    """Load a catalog from a ``{TypeName: {"fields": [...]}}`` JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InputValidationError
        If the file is not valid JSON or does not match the catalog schema.
    """
    file_path = Path(path)
    return parse_catalog(_read_json(file_path), path=str(file_path))


def load_sources(path: str | Path) -> list[Source]:
    """Load a source batch from a ``{"sources": [...]}`` JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InputValidationError
        If the file is not valid JSON or does not match the sources schema.
    """
    file_path = Path(path)
    return parse_sources(_read_json(file_path), path=str(file_path))


def write_json(data: Any, path: str | Path) -> Path:
    """Write ``data`` as deterministic, indented UTF-8 JSON.

    Parent directories are created as needed.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=True)
        f.write("\n")
    return output_path
