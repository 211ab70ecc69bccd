"""Public SDK surface for Seedkit.

This module provides a stable import path for SDK users.
It re-exports the primary client, strategy helpers, and typed models.
"""

from __future__ import annotations

from core.config import SeedConfig
from core.types import SeedOptions, SeedStats
from seed.client import SeedClient
from seed.presets import DatasetPreset, available_presets, get_preset
from seed.runner import SeedRunner, run_seed
from seed.strategy import RecordStrategy, allow_list_fields, drop_fields, namespace_from_seed
from store.entity_store import open_entity_store
from store.memory_store import InMemoryEntityStore

__all__ = [
    "DatasetPreset",
    "InMemoryEntityStore",
    "RecordStrategy",
    "SeedClient",
    "SeedConfig",
    "SeedOptions",
    "SeedRunner",
    "SeedStats",
    "allow_list_fields",
    "available_presets",
    "drop_fields",
    "get_preset",
    "namespace_from_seed",
    "open_entity_store",
    "run_seed",
]
