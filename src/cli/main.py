"""Seedkit CLI entry points.
This module exposes seed commands for the built-in datasets.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from cli.seed_command import add_seed_command, run_seed_command
from core.config import SeedConfig
from core.errors import SeedError
from seed.client import SeedClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="seedkit", description="Seedkit entity seeding CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_seed_command(subparsers)
    _add_datasets_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Seedkit CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = SeedClient(SeedConfig.from_env())
        if args.command == "seed":
            return run_seed_command(client, args)
        if args.command == "datasets":
            return _run_datasets_command(client)
        if args.command == "run-spec":
            return run_run_spec_command(client, args)
    except SeedError as error:
        print(f"seed failed: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_datasets_command(client: SeedClient) -> int:
    """Print built-in datasets with their default tables."""
    for preset in client.datasets():
        print(f"{preset.name}\t{preset.table_name}\t{preset.description}")
    return 0


def _add_datasets_command(subparsers: Any) -> None:
    """Register datasets subcommand."""
    subparsers.add_parser("datasets", help="List built-in datasets and default tables")
