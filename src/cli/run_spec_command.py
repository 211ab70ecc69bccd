"""Seed plan CLI command wiring.

This module registers the run-spec subcommand and delegates execution to
the shared plan engine used by CLI and SDK entry points.
"""

from __future__ import annotations

import argparse
from typing import Any

from seed.client import SeedClient


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run a declarative YAML seed plan",
    )
    parser.add_argument("spec_file", help="Path to YAML seed plan file")


def run_run_spec_command(client: SeedClient, args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    for line in client.run_spec(args.spec_file):
        print(line)
    return 0
