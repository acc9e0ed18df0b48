"""Configuration for ext-harness."""

from __future__ import annotations

from ext_harness.config.base import get_settings
from ext_harness.config.harness import HarnessSettings

__all__ = ['HarnessSettings', 'get_settings']
