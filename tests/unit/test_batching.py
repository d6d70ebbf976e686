"""Tests for cross-source canonicalization and declaration batching."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from typecanon.audit.logger import AuditLogger
from typecanon.canonical import (
    BatchCounter,
    NameGenerator,
    canonicalize_sources,
    group_sources_by_declaration,
)
from typecanon.errors import MissingDefinitionError
from typecanon.models import Source

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _prim(name: str, type_name: str) -> dict[str, Any]:
    return {"name": name, "type": type_name, "isComplex": False, "isArray": False}


def _ref(name: str, type_name: str) -> dict[str, Any]:
    return {"name": name, "type": type_name, "isComplex": True, "isArray": False}


def _read_events(path: Path) -> list[dict[str, Any]]:
    with path.open() as f:
        return [json.loads(line) for line in f if line.strip()]


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_group_by_raw_declaration(make_source: Callable[..., Source]) -> None:
    """Test byte-identical raw declarations share a group, in first-seen order."""
    a = make_source("/a", [_prim("v", "int8")], raw_declaration="int8 v")
    b = make_source("/b", [_prim("w", "int8")], raw_declaration="int8 w")
    c = make_source("/c", [_prim("v", "int8")], raw_declaration="int8 v")

    groups = group_sources_by_declaration([a, b, c])

    assert [[s.source_key for s in g] for g in groups.values()] == [["/a", "/c"], ["/b"]]


@pytest.mark.unit
def test_group_falls_back_to_parsed_definitions(make_source: Callable[..., Source]) -> None:
    """Test sources without raw text are grouped by their parsed declarations."""
    a = make_source("/a", [_prim("v", "int8")])
    b = make_source("/b", [_prim("v", "int8")])
    c = make_source("/c", [_prim("v", "int16")])

    groups = group_sources_by_declaration([a, b, c])

    assert len(groups) == 2


@pytest.mark.unit
def test_group_separates_different_root_types(make_source: Callable[..., Source]) -> None:
    """Test the root type is part of the group key."""
    a = make_source("/a", [_prim("v", "int8")], root_type="A", raw_declaration="int8 v")
    b = make_source("/b", [_prim("v", "int8")], root_type="B", raw_declaration="int8 v")

    assert len(group_sources_by_declaration([a, b])) == 2


# ---------------------------------------------------------------------------
# Canonical names
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_same_shape_different_names_share_canonical_name(
    make_source: Callable[..., Source],
) -> None:
    """Test Foo/R and Bar/R with identical fields collapse; int32 differs."""
    foo = make_source("/foo", [_prim("v", "float64")], root_type="Foo")
    bar = make_source("/bar", [_prim("v", "float64")], root_type="Bar")
    other = make_source("/other", [_prim("v", "int32")], root_type="R")

    result = canonicalize_sources([foo, bar, other])

    assert result.prefix == "f_0"
    assert result.names_by_source == {"/foo": "f_0_0", "/bar": "f_0_0", "/other": "f_0_1"}
    assert set(result.catalog) == {"f_0_0", "f_0_1"}
    assert result.groups_processed == 3


@pytest.mark.unit
def test_nested_graphs_with_renamed_children_collapse(
    make_source: Callable[..., Source],
) -> None:
    """Test structurally identical nested graphs get the same root name."""
    first = make_source(
        "/first",
        [_ref("header", "std_msgs/Header"), _prim("t", "float64")],
        root_type="sensor_msgs/Temperature",
        named={"std_msgs/Header": [_prim("seq", "uint32"), _prim("frame_id", "string")]},
    )
    second = make_source(
        "/second",
        [_ref("header", "my/Hdr"), _prim("t", "float64")],
        root_type="my/Temp",
        named={"my/Hdr": [_prim("seq", "uint32"), _prim("frame_id", "string")]},
    )
    changed_child = make_source(
        "/third",
        [_ref("header", "my/Hdr"), _prim("t", "float64")],
        root_type="my/Temp",
        named={"my/Hdr": [_prim("seq", "uint64"), _prim("frame_id", "string")]},
    )

    result = canonicalize_sources([first, second, changed_child])

    assert result.names_by_source["/first"] == result.names_by_source["/second"]
    assert result.names_by_source["/third"] != result.names_by_source["/first"]

    root = result.catalog[result.names_by_source["/first"]]
    assert root.fields[0].type in result.catalog
    assert len(result.catalog) == 4


@pytest.mark.unit
def test_identical_declarations_processed_once(make_source: Callable[..., Source]) -> None:
    """Test byte-identical declarations receive the same name via one group."""
    sources = [
        make_source(f"/topic{i}", [_prim("v", "int8")], raw_declaration="int8 v") for i in range(5)
    ]

    result = canonicalize_sources(sources)

    assert result.groups_processed == 1
    assert set(result.names_by_source.values()) == {"f_0_0"}
    assert len(result.names_by_source) == 5


@pytest.mark.unit
def test_batched_equals_unbatched(make_source: Callable[..., Source]) -> None:
    """Test grouping yields the same output as processing every source alone."""
    sources = [
        make_source("/a", [_ref("p", "P")], named={"P": [_prim("x", "int8")]}, raw_declaration="A"),
        make_source("/b", [_prim("v", "int8")], raw_declaration="B"),
        make_source("/c", [_ref("p", "P")], named={"P": [_prim("x", "int8")]}, raw_declaration="A"),
        make_source("/d", [_ref("q", "Q")], named={"Q": [_prim("x", "int8")]}, raw_declaration="D"),
    ]

    batched = canonicalize_sources(sources, name_generator=NameGenerator("g"))

    gen = NameGenerator("g")
    names: dict[str, str] = {}
    catalog: dict[str, Any] = {}
    for source in sources:
        single = canonicalize_sources([source], name_generator=gen)
        names.update(single.names_by_source)
        catalog.update(single.catalog)

    assert batched.names_by_source == names
    assert batched.catalog == catalog
    assert batched.groups_processed == 3


@pytest.mark.unit
def test_primitive_field_matching_local_name_is_not_rewritten(
    make_source: Callable[..., Source],
) -> None:
    """Test a shared canonical name has one definition when a primitive type
    coincides with a type declared by only one source."""
    with_b = make_source(
        "/a",
        [_prim("t", "B")],
        root_type="R",
        named={"B": [_prim("v", "int8")]},
        raw_declaration="with B",
    )
    without_b = make_source("/b", [_prim("t", "B")], root_type="R", raw_declaration="without B")

    gen = NameGenerator("g")
    first = canonicalize_sources([with_b], name_generator=gen)
    second = canonicalize_sources([without_b], name_generator=gen)

    name = first.names_by_source["/a"]
    assert second.names_by_source["/b"] == name
    assert first.catalog[name] == second.catalog[name]
    assert first.catalog[name].fields[0].type == "B"

    merged = canonicalize_sources([with_b, without_b], name_generator=NameGenerator("g"))
    assert merged.catalog[name] == second.catalog[name]


@pytest.mark.unit
def test_repeated_batches_use_fresh_prefixes_and_reset_reproduces(
    make_source: Callable[..., Source],
) -> None:
    """Test each batch draws a new prefix and a reset reproduces names."""
    counter = BatchCounter()
    sources = [make_source("/a", [_prim("v", "int8")])]

    first = canonicalize_sources(sources, batch_counter=counter)
    second = canonicalize_sources(sources, batch_counter=counter)
    counter.reset()
    third = canonicalize_sources(sources, batch_counter=counter)

    assert first.names_by_source == {"/a": "f_0_0"}
    assert second.names_by_source == {"/a": "f_1_0"}
    assert third.names_by_source == first.names_by_source
    assert third.catalog == first.catalog


# ---------------------------------------------------------------------------
# Unresolved and failing sources
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_sources_without_root_are_omitted(make_source: Callable[..., Source]) -> None:
    """Test sources with no root or an undeclared root get no mapping."""
    no_hint = make_source("/no_hint", [_prim("v", "int8")], root_type=None)
    undeclared = Source.from_dict(
        {
            "sourceKey": "/undeclared",
            "rootType": "Root",
            "parsedDefinitions": [{"name": "Other", "definitions": [_prim("v", "int8")]}],
        }
    )
    good = make_source("/good", [_prim("v", "int16")])

    result = canonicalize_sources([no_hint, undeclared, good])

    assert result.names_by_source == {"/good": result.names_by_source["/good"]}
    assert result.unresolved_sources == ["/no_hint", "/undeclared"]
    assert result.failed_groups == []


@pytest.mark.unit
def test_missing_definition_isolated_to_its_group(make_source: Callable[..., Source]) -> None:
    """Test a broken group is recorded and does not disturb later names."""
    before = make_source("/before", [_prim("v", "int8")])
    broken = make_source(
        "/broken",
        [_ref("inner", "x/Missing")],
        named={"x/Fine": [_prim("w", "int64")]},
        raw_declaration="broken",
    )
    broken_twin = make_source(
        "/broken_twin",
        [_ref("inner", "x/Missing")],
        named={"x/Fine": [_prim("w", "int64")]},
        raw_declaration="broken",
    )
    after = make_source("/after", [_prim("v", "int16")])

    result = canonicalize_sources([before, broken, broken_twin, after])

    assert result.names_by_source == {"/before": "f_0_0", "/after": "f_0_1"}
    assert len(result.failed_groups) == 1
    failure = result.failed_groups[0]
    assert failure.source_keys == ("/broken", "/broken_twin")
    assert failure.exception_class == "MissingDefinitionError"
    assert "x/Missing" in failure.message


@pytest.mark.unit
def test_strict_mode_raises(make_source: Callable[..., Source]) -> None:
    """Test strict mode propagates group failures."""
    broken = make_source("/broken", [_ref("inner", "x/Missing")])

    with pytest.raises(MissingDefinitionError):
        canonicalize_sources([broken], strict=True)


@pytest.mark.unit
def test_result_to_dict_is_sorted(make_source: Callable[..., Source]) -> None:
    """Test result serialization sorts sources and catalog names."""
    result = canonicalize_sources(
        [
            make_source("/z", [_prim("v", "int8")]),
            make_source("/a", [_prim("v", "int16")]),
        ]
    )

    data = result.to_dict()

    assert list(data["names_by_source"]) == ["/a", "/z"]
    assert list(data["catalog"]) == ["f_0_0", "f_0_1"]
    assert data["catalog"]["f_0_0"]["fields"][0] == _prim("v", "int8")


# ---------------------------------------------------------------------------
# Audit events
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_batch_emits_audit_events(tmp_path: Path, make_source: Callable[..., Source]) -> None:
    """Test batch, group and unresolved events are logged."""
    sources = [
        make_source("/ok", [_prim("v", "int8")]),
        make_source("/broken", [_ref("inner", "x/Missing")]),
        make_source("/no_root", [_prim("v", "int8")], root_type=None),
    ]

    with AuditLogger("run", tmp_path / "events.jsonl") as logger:
        canonicalize_sources(sources, logger=logger)

    events = _read_events(tmp_path / "events.jsonl")
    names = [e["event"] for e in events]

    assert names == [
        "batch_started",
        "group_processed",
        "group_failed",
        "source_unresolved",
        "batch_finished",
    ]
    assert events[0]["data"] == {"prefix": "f_0", "sources": 3, "groups": 3}
    assert events[2]["level"] == "ERROR"
    assert events[3]["level"] == "WARN"
    assert events[3]["data"] == {"source_key": "/no_root"}
    assert events[-1]["data"]["resolved_sources"] == 1
    assert all(e["stage"] == "canonicalize" for e in events)
