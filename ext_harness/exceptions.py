"""
Shared exceptions for ext-harness.

Exception Hierarchy:
    ExtensionHarnessError (base)
    ├── MockSpecError (fixture cannot be read or validated)
    └── ExtensionLoadError (bundle path cannot be resolved to an entry point)
"""

from __future__ import annotations

from pathlib import Path


class ExtensionHarnessError(Exception):
    """Base exception for all ext-harness errors."""


class MockSpecError(ExtensionHarnessError):
    """Raised when a mock specification file cannot be read or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'Invalid mock spec {path}: {reason}')


class ExtensionLoadError(ExtensionHarnessError):
    """Raised by the loader when a bundle path does not resolve to a loadable extension."""
