"""Deterministic conformance harness for third-party extension bundles."""

from __future__ import annotations

__version__ = '0.1.0'
