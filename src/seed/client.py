"""Python SDK for seed operations.

This module exposes high-level APIs for seeding built-in datasets or
custom strategies into an entity store.
"""

from __future__ import annotations

from core.config import SeedConfig
from core.run_spec_execution import execute_run_spec_file
from core.types import SeedOptions, SeedStats
from seed.presets import DatasetPreset, available_presets, get_preset
from seed.runner import run_seed
from store.entity_store import StoreOpener


class SeedClient:
    """Primary SDK entry point for seed workflows."""

    def __init__(
        self,
        config: SeedConfig | None = None,
        store_opener: StoreOpener | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            store_opener: Optional factory replacing the PostgreSQL store.
        """
        self._config = config or SeedConfig.from_env()
        self._store_opener = store_opener

    @property
    def config(self) -> SeedConfig:
        return self._config

    def seed(self, options: SeedOptions) -> SeedStats:
        """Run one seed job with an explicit strategy.

        Args:
            options: Seed options.

        Returns:
            Final statistics.

        Raises:
            SeedConfigError: If options are invalid.
            SeedResourceError: If a resource cannot be opened.
            SeedRecordError: For the first fatal record failure.
        """
        return run_seed(options, self._config, self._store_opener)

    def seed_dataset(
        self,
        dataset: str,
        input_path: str,
        table_name: str | None = None,
        concurrency: int | None = None,
        database_url: str | None = None,
        max_line_bytes: int | None = None,
    ) -> SeedStats:
        """Seed one built-in dataset.

        Unset arguments fall back to the preset table and to the client
        configuration.

        Args:
            dataset: Preset name, such as ``pkm-cards``.
            input_path: Local JSONL path or S3 URI.
            table_name: Optional target table override.
            concurrency: Optional worker count.
            database_url: Optional store connection string.
            max_line_bytes: Optional maximum line length.

        Returns:
            Final statistics.
        """
        preset = get_preset(dataset)
        options = SeedOptions(
            input_path=input_path,
            table_name=table_name or preset.table_name,
            database_url=database_url or self._config.database_url or "",
            strategy=preset.strategy,
            concurrency=concurrency if concurrency is not None else self._config.concurrency,
            max_line_bytes=(
                max_line_bytes if max_line_bytes is not None else self._config.max_line_bytes
            ),
        )
        return self.seed(options)

    def datasets(self) -> tuple[DatasetPreset, ...]:
        """Return built-in dataset presets in name order."""
        return tuple(get_preset(name) for name in available_presets())

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML seed plan through the shared execution engine.

        Args:
            spec_file: Path to YAML plan file.

        Returns:
            Ordered command output lines.
        """
        return execute_run_spec_file(self, spec_file)
