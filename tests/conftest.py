"""Shared fixtures for ext-harness tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from ext_harness.config import HarnessSettings
from ext_harness.schemas.snapshot import Snapshot
from ext_harness.services.harness import run_harness
from ext_harness.services.network import FetchSlot, HttpxFetch

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
EXTENSIONS_DIR = FIXTURES_DIR / 'extensions'
SPECS_DIR = FIXTURES_DIR / 'specs'


@pytest.fixture
def fetch_slot() -> FetchSlot:
    """Private slot so tests never touch the process-wide one."""
    return FetchSlot(HttpxFetch())


@pytest.fixture
def run(fetch_slot: FetchSlot, tmp_path: Path) -> Callable[..., Snapshot]:
    """Run a fixture extension against a fixture spec: run('minimal_tool.py', 'empty.json')."""

    def _run(extension: str, spec: str, *, capture_logs: bool = False, **kwargs: object) -> Snapshot:
        return asyncio.run(
            run_harness(
                EXTENSIONS_DIR / extension,
                SPECS_DIR / spec,
                tmp_path,
                fetch_slot=fetch_slot,
                settings=HarnessSettings(CAPTURE_LOGS=capture_logs, FORCE_EXIT=False),
                **kwargs,
            )
        )

    return _run
