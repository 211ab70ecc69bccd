"""Seed command wiring for Seedkit CLI."""

from __future__ import annotations

import argparse
from typing import Any

from seed.client import SeedClient
from seed.presets import available_presets


def add_seed_command(subparsers: Any) -> None:
    """Register seed subcommand."""
    parser = subparsers.add_parser("seed", help="Seed a JSONL dataset into an entity table")
    parser.add_argument("dataset", choices=available_presets(), help="Built-in dataset name")
    parser.add_argument("--input", required=True, help="JSONL file path or s3://bucket/key")
    parser.add_argument("--table", help="Target entity table (defaults to the dataset table)")
    parser.add_argument("--concurrency", type=int, help="Number of parallel workers")
    parser.add_argument(
        "--database-url",
        help="PostgreSQL connection string (defaults to SEED_DATABASE_URL or DATABASE_URL)",
    )
    parser.add_argument(
        "--max-line-bytes",
        type=int,
        help="Maximum accepted input line length in bytes",
    )


def run_seed_command(client: SeedClient, args: argparse.Namespace) -> int:
    """Handle seed command invocation."""
    stats = client.seed_dataset(
        args.dataset,
        args.input,
        table_name=args.table,
        concurrency=args.concurrency,
        database_url=args.database_url,
        max_line_bytes=args.max_line_bytes,
    )
    print(f"processed={stats.processed}")
    print(f"skipped={stats.skipped}")
    for field_name in sorted(stats.ignored_field_counts):
        print(f"ignored.{field_name}={stats.ignored_field_counts[field_name]}")
    return 0
