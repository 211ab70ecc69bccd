"""Streaming concurrent seed pipeline.

This package reads line-delimited JSON, derives record identities,
and writes entities through an idempotent store from a worker pool.
"""
