"""Canonicalization run configuration and result dataclasses."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any


@dataclass
class CanonicalizeConfig:
    """Configuration for a canonicalization run.

    Attributes
    ----------
    output_dir : Path
        Directory receiving every output file.
    name_prefix : str
        Leading component of generated names (default: "f").
    strict : bool
        Abort the whole run on the first failing group instead of isolating it.
    write_audit_log : bool
        Write events.jsonl to output_dir.
    """

    output_dir: Path = Path("out")
    name_prefix: str = "f"
    strict: bool = False
    write_audit_log: bool = True

    def __post_init__(self) -> None:
        """Normalize paths and validate."""
        self.output_dir = Path(self.output_dir)

        if not self.name_prefix or not self.name_prefix.isidentifier():
            raise ValueError(f"name_prefix must be a non-empty identifier, got {self.name_prefix!r}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["output_dir"] = str(self.output_dir)
        return data


@dataclass
class CanonicalizeResult:
    """Results from a canonicalization run.

    Attributes
    ----------
    success : bool
        Whether the run completed.
    total_sources : int
        Sources read from the input file.
    resolved_sources : int
        Sources that received a canonical root name.
    unresolved_sources : int
        Sources whose root type was not declared.
    failed_groups : int
        Declaration groups aborted by a missing definition or a cycle.
    canonical_types : int
        Distinct canonical types in the merged catalog.
    output_files : dict[str, str]
        Map of artifact type to file path.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_sources: int
    resolved_sources: int
    unresolved_sources: int
    failed_groups: int
    canonical_types: int
    output_files: dict[str, str]
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
