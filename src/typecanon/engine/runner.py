"""File-based canonicalization runner.

Reads a source batch, canonicalizes it and writes:
    names_by_source.json    source key -> canonical root name
    canonical_catalog.json  merged canonical catalog
    report.json             counters, failures and environment
    events.jsonl            audit events (optional)
"""

import sys
import time
import traceback
from pathlib import Path
from typing import Any

from typecanon.audit.helpers import generate_run_id, get_dependency_versions, get_package_version
from typecanon.audit.logger import AuditLogger
from typecanon.canonical.batching import canonicalize_sources
from typecanon.canonical.models import CanonicalizationResult
from typecanon.canonical.naming import BatchCounter, default_batch_counter
from typecanon.engine.config import CanonicalizeConfig, CanonicalizeResult
from typecanon.io import load_sources, write_json
from typecanon.models import catalog_to_dict
from typecanon.utils import calculate_file_sha256

_STAGE_LOAD = "load"
_STAGE_WRITE = "write"


def _build_report(
    input_path: Path,
    config: CanonicalizeConfig,
    total_sources: int,
    result: CanonicalizationResult,
) -> dict[str, Any]:
    """Build the run report written to report.json."""
    return {
        "input": {"path": str(input_path), "sha256": calculate_file_sha256(input_path)},
        "config": config.to_dict(),
        "prefix": result.prefix,
        "counters": {
            "sources": total_sources,
            "groups_processed": result.groups_processed,
            "resolved_sources": len(result.names_by_source),
            "unresolved_sources": len(result.unresolved_sources),
            "failed_groups": len(result.failed_groups),
            "canonical_types": len(result.catalog),
        },
        "unresolved_sources": list(result.unresolved_sources),
        "failed_groups": [f.to_dict() for f in result.failed_groups],
        "environment": {
            "package_version": get_package_version(),
            "dependencies": get_dependency_versions(["click", "jsonschema"]),
        },
    }


def _write_outputs(
    result: CanonicalizationResult,
    report: dict[str, Any],
    output_dir: Path,
    logger: AuditLogger | None,
) -> dict[str, str]:
    """Write result artifacts and return their paths."""
    artifacts = {
        "names_by_source": (
            output_dir / "names_by_source.json",
            dict(sorted(result.names_by_source.items())),
        ),
        "canonical_catalog": (output_dir / "canonical_catalog.json", catalog_to_dict(result.catalog)),
        "report": (output_dir / "report.json", report),
    }

    output_files: dict[str, str] = {}
    for name, (path, data) in artifacts.items():
        write_json(data, path)
        output_files[name] = str(path)
        if logger:
            logger.artifact_written(str(path), calculate_file_sha256(path), stage=_STAGE_WRITE)

    return output_files


def _run(
    input_path: Path,
    config: CanonicalizeConfig,
    logger: AuditLogger | None,
    batch_counter: BatchCounter,
) -> CanonicalizeResult:
    total_sources = 0
    start_time = time.perf_counter()

    if logger:
        logger.run_started(command=sys.argv, parameters=config.to_dict())

    try:
        if logger:
            logger.event("sources_loading", stage=_STAGE_LOAD, data={"path": str(input_path)})
        sources = load_sources(input_path)
        total_sources = len(sources)

        result = canonicalize_sources(
            sources,
            batch_counter=batch_counter,
            strict=config.strict,
            logger=logger,
        )

        report = _build_report(input_path, config, total_sources, result)
        output_files = _write_outputs(result, report, config.output_dir, logger)
        if logger:
            output_files["events"] = str(logger.log_path)
            status = "partial" if result.failed_groups else "success"
            logger.run_finished(status, time.perf_counter() - start_time)

        return CanonicalizeResult(
            success=True,
            total_sources=total_sources,
            resolved_sources=len(result.names_by_source),
            unresolved_sources=len(result.unresolved_sources),
            failed_groups=len(result.failed_groups),
            canonical_types=len(result.catalog),
            output_files=output_files,
        )

    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        if logger:
            logger.error(type(e).__name__, str(e), traceback=traceback.format_exc())
            logger.run_finished("failed", time.perf_counter() - start_time)
        return CanonicalizeResult(
            success=False,
            total_sources=total_sources,
            resolved_sources=0,
            unresolved_sources=0,
            failed_groups=0,
            canonical_types=0,
            output_files={},
            error_message=error_msg,
        )


def run_canonicalization(
    input_path: Path | str,
    config: CanonicalizeConfig | None = None,
    logger: AuditLogger | None = None,
    batch_counter: BatchCounter | None = None,
) -> CanonicalizeResult:
    """Canonicalize the source batch stored at ``input_path``.

    Parameters
    ----------
    input_path : Path | str
        JSON file holding ``{"sources": [...]}``.
    config : CanonicalizeConfig | None, optional
        Run configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Audit logger. If None and ``config.write_audit_log`` is set, a logger
        writing ``events.jsonl`` into the output directory is created.
    batch_counter : BatchCounter | None, optional
        Counter providing the batch prefix. Defaults to the process-wide
        counter for ``config.name_prefix``.

    Returns
    -------
    CanonicalizeResult
        Run counters and output paths. Failures are reported through
        ``success`` and ``error_message`` rather than raised.

    Examples
    --------
        >>> from typecanon.engine import CanonicalizeConfig, run_canonicalization
        >>> result = run_canonicalization("sources.json", CanonicalizeConfig(output_dir="out"))
        >>> result.success
        True
    """
    input_path = Path(input_path)

    if config is None:
        config = CanonicalizeConfig()

    if batch_counter is None:
        batch_counter = default_batch_counter(config.name_prefix)

    if logger is not None or not config.write_audit_log:
        return _run(input_path, config, logger, batch_counter)

    with AuditLogger(generate_run_id(), config.output_dir / "events.jsonl") as owned_logger:
        return _run(input_path, config, owned_logger, batch_counter)
