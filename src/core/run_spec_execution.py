"""Shared seed plan execution engine for CLI and SDK workflows.

This module maps validated plan steps to client operations so different
entry points execute one declarative path without drift.
"""

from __future__ import annotations

from typing import Protocol

from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.types import SeedStats


class RunSpecClient(Protocol):
    """Client API contract required by plan execution."""

    def seed_dataset(
        self,
        dataset: str,
        input_path: str,
        table_name: str | None = None,
        concurrency: int | None = None,
        database_url: str | None = None,
        max_line_bytes: int | None = None,
    ) -> SeedStats: ...


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a plan file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Run plan steps in order; the first failing step stops the plan."""
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.append(_execute_step(client, spec, step))
    return tuple(output_lines)


def _execute_step(client: RunSpecClient, spec: RunSpec, step: RunSpecStep) -> str:
    concurrency = step.concurrency if step.concurrency is not None else spec.defaults.concurrency
    stats = client.seed_dataset(
        step.dataset,
        step.input_path,
        table_name=step.table_name,
        concurrency=concurrency,
        database_url=spec.defaults.database_url,
        max_line_bytes=step.max_line_bytes,
    )
    return f"dataset={step.dataset} processed={stats.processed} skipped={stats.skipped}"
