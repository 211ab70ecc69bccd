"""Unit tests for run-spec CLI command wiring."""

from __future__ import annotations

from cli.main import main
from core.types import SeedStats
from seed.client import SeedClient
from tests.fixture_paths import fixture_path


def test_cli_run_spec_prints_step_results(monkeypatch, capsys) -> None:
    """Run-spec command should execute each plan step in order."""
    datasets: list[str] = []

    def _fake_seed_dataset(self, dataset, input_path, **kwargs):
        datasets.append(dataset)
        return SeedStats(processed=1, skipped=0)

    monkeypatch.setattr(SeedClient, "seed_dataset", _fake_seed_dataset)

    exit_code = main(["run-spec", str(fixture_path("run_spec/valid_plan.yaml"))])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and datasets == ["pkm-sets", "pkm-cards"]
    assert output[0] == "dataset=pkm-sets processed=1 skipped=0"


def test_cli_run_spec_invalid_plan_exits_with_error(capsys) -> None:
    """Invalid plans should exit non-zero."""
    exit_code = main(["run-spec", str(fixture_path("run_spec/unknown_step_key.yaml"))])

    assert exit_code == 1 and "workers" in capsys.readouterr().err
