"""
Harness orchestration and failure boundary.

One run: parse the mock spec, install the HTTP mock, bind the instrumented
runtime adapter, load the bundle, then build exactly one snapshot.

Every failure becomes a FailureSnapshot:
- loader reported errors -> "path: message" list, load time kept
- loader returned no extension -> "No extension loaded (empty result)"
- anything raised (including SystemExit, CancelledError and other
  BaseExceptions from extension code) -> message and traceback,
  load_time_ms null. KeyboardInterrupt still propagates.

The fetch slot is restored on every exit path.
"""

from __future__ import annotations

import time
import traceback
from pathlib import Path

from ext_harness.config import HarnessSettings, get_settings
from ext_harness.extensions.loader import LoadResult, PythonExtensionLoader
from ext_harness.protocols import ExtensionLoader, LoggerProtocol, NullLogger
from ext_harness.schemas.capture import CaptureLog
from ext_harness.schemas.mock_spec import load_mock_spec
from ext_harness.schemas.snapshot import FailureSnapshot, Snapshot, SpecEcho, SuccessSnapshot
from ext_harness.services.console import ConsoleCapture
from ext_harness.services.instrumentation import MockRuntimeActions, MockState
from ext_harness.services.introspection import describe_extension, describe_runtime
from ext_harness.services.network import FetchSlot, MockFetch, ambient_fetch

__all__ = [
    'EMPTY_LOAD_ERROR',
    'FIRE_SEQUENCE_WARNING',
    'run_harness',
]

EMPTY_LOAD_ERROR = 'No extension loaded (empty result)'
FIRE_SEQUENCE_WARNING = 'events.fire_sequence provided but event firing is not implemented in this harness'


def _format_exception(exc: BaseException) -> str:
    return f'{exc}\n{"".join(traceback.format_exception(exc)).rstrip()}'


def _load_failure(result: LoadResult, load_time_ms: int) -> FailureSnapshot:
    return FailureSnapshot(
        error='; '.join(f'{e.path}: {e.error}' for e in result.errors),
        load_time_ms=load_time_ms,
    )


async def _run(
    extension_path: Path,
    spec_path: Path,
    cwd: Path,
    loader: ExtensionLoader,
    fetch_slot: FetchSlot,
    logger: LoggerProtocol,
) -> Snapshot:
    spec = load_mock_spec(spec_path)
    capture = CaptureLog()
    state = MockState.from_spec(spec)
    actions = MockRuntimeActions(spec, state, capture)

    with fetch_slot.installed(MockFetch(spec.http, capture)):
        await logger.info(f'Loading extension: {extension_path}')
        start = time.perf_counter()
        result = await loader.load([extension_path], cwd, actions=actions, fetch=fetch_slot)
        load_time_ms = int((time.perf_counter() - start) * 1000)

        if result.errors:
            await logger.warning(f'Extension failed to load ({len(result.errors)} error(s))')
            return _load_failure(result, load_time_ms)

        if not result.extensions:
            await logger.warning(EMPTY_LOAD_ERROR)
            return FailureSnapshot(error=EMPTY_LOAD_ERROR, load_time_ms=load_time_ms)

        await logger.info(f'Loaded {len(result.extensions)} extension(s) in {load_time_ms}ms')

        if spec.events.fire_sequence:
            capture.warnings.append(FIRE_SEQUENCE_WARNING)

        misses = sum(not c.matched for c in capture.exec) + sum(not c.matched for c in capture.http)
        if misses:
            await logger.info(f'{misses} exec/http call(s) fell back to a default response')

        return SuccessSnapshot(
            load_time_ms=load_time_ms,
            spec=SpecEcho(path=str(spec_path), schema_=spec.schema_, extension_id=spec.extension_id),
            extension=describe_extension(result.extensions[0], result.runtime),
            runtime=describe_runtime(state),
            capture=capture,
        )


async def run_harness(
    extension_path: Path,
    spec_path: Path,
    cwd: Path | None = None,
    *,
    loader: ExtensionLoader | None = None,
    fetch_slot: FetchSlot = ambient_fetch,
    settings: HarnessSettings | None = None,
    logger: LoggerProtocol | None = None,
) -> Snapshot:
    """
    Run one extension bundle against a mock spec and return its snapshot.

    Never raises for failures of the bundle or the fixture; those are reported
    in the returned snapshot.

    Args:
        extension_path: Bundle path (relative paths resolve against cwd)
        spec_path: Mock spec JSON file
        cwd: Working directory handed to the loader (default: process cwd)
        loader: Extension loader (default: PythonExtensionLoader)
        fetch_slot: Network capability to mock for the run (default: ambient slot)
        settings: Harness settings (default: read from the environment)
        logger: Progress logger (default: NullLogger)

    Returns:
        SuccessSnapshot or FailureSnapshot
    """
    settings = settings or get_settings(HarnessSettings)
    logger = logger or NullLogger()
    loader = loader or PythonExtensionLoader()
    cwd = cwd or Path.cwd()

    console = ConsoleCapture(enabled=settings.CAPTURE_LOGS)
    with console:
        try:
            snapshot = await _run(extension_path, spec_path, cwd, loader, fetch_slot, logger)
        except BaseException as e:
            if isinstance(e, KeyboardInterrupt):
                raise
            await logger.error(f'Harness run failed: {e!r}')
            snapshot = FailureSnapshot(error=_format_exception(e), load_time_ms=None)

    logs = console.logs()
    if logs is not None:
        snapshot = snapshot.model_copy(update={'logs': logs})
    return snapshot
