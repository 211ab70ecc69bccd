"""Entity store layer.

This package defines the entity-store contract used by seed workers and
provides PostgreSQL and in-memory implementations of it.
"""
