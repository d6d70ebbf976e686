"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from typecanon.canonical import reset_batch_counter  # noqa: E402
from typecanon.models import Source, TypeDefinition, catalog_from_dict  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_name_prefixes() -> Iterator[None]:
    """Make generated canonical names reproducible in every test."""
    reset_batch_counter()
    yield
    reset_batch_counter()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding JSON fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def make_catalog() -> Callable[..., dict[str, TypeDefinition]]:
    """Factory for catalogs from ``{name: [field dicts]}``."""

    def _factory(types: dict[str, list[dict[str, Any]]]) -> dict[str, TypeDefinition]:
        return catalog_from_dict({name: {"fields": fields} for name, fields in types.items()})

    return _factory


@pytest.fixture
def make_source() -> Callable[..., Source]:
    """Factory for sources with minimal boilerplate.

    ``root_fields`` become the unnamed root declaration; ``named`` adds
    further named declarations.
    """

    def _factory(
        source_key: str,
        root_fields: list[dict[str, Any]],
        *,
        root_type: str | None = "Root",
        named: dict[str, list[dict[str, Any]]] | None = None,
        raw_declaration: str | None = None,
    ) -> Source:
        parsed: list[dict[str, Any]] = [{"definitions": root_fields}]
        for name, fields in (named or {}).items():
            parsed.append({"name": name, "definitions": fields})
        return Source.from_dict(
            {
                "sourceKey": source_key,
                "parsedDefinitions": parsed,
                "rootType": root_type,
                "rawDeclaration": raw_declaration,
            }
        )

    return _factory
