"""
Snapshot schema - the single document a harness run emits.

Two mutually exclusive shapes:
- SuccessSnapshot: declared capabilities, resulting mock state, capture log
- FailureSnapshot: load errors, empty load, or an uncaught exception

Field names are the JSON keys of the emitted document. `logs` is omitted
entirely unless console capture was enabled for the run.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import pydantic

from ext_harness.base_model import StrictModel
from ext_harness.schemas.capture import CaptureLog
from ext_harness.schemas.mock_spec import ModelRecord, ToolInfo
from ext_harness.schemas.types import FlagType, JsonValue, LogLevel

__all__ = [
    'CapturedLog',
    'CommandSnapshot',
    'ExtensionSnapshot',
    'FailureSnapshot',
    'FlagSnapshot',
    'ProviderModelSnapshot',
    'ProviderSnapshot',
    'RuntimeSnapshot',
    'ShortcutSnapshot',
    'Snapshot',
    'SpecEcho',
    'SuccessSnapshot',
    'ToolSnapshot',
    'render_snapshot',
]


class CapturedLog(StrictModel):
    """One line of console output produced by extension code."""

    level: LogLevel
    message: str


# ==============================================================================
# Declared capabilities
# ==============================================================================


class ToolSnapshot(StrictModel):
    name: str
    label: str | None
    description: str | None
    parameters: JsonValue
    hasExecute: bool


class CommandSnapshot(StrictModel):
    name: str
    description: str | None
    userFacing: bool
    hasHandler: bool


class ShortcutSnapshot(StrictModel):
    shortcut: str
    description: str | None
    hasHandler: bool


class FlagSnapshot(StrictModel):
    name: str
    type: FlagType
    default: bool | str | None
    description: str | None


class ProviderModelSnapshot(StrictModel):
    id: str | None
    name: str | None


class ProviderSnapshot(StrictModel):
    name: str
    models: Sequence[ProviderModelSnapshot]


class ExtensionSnapshot(StrictModel):
    """Everything one extension registered, introspected without invoking it."""

    path: str
    resolvedPath: str
    handlers: dict[str, int]  # Event name -> registered handler count
    tools: Sequence[ToolSnapshot]
    commands: Sequence[CommandSnapshot]
    shortcuts: Sequence[ShortcutSnapshot]
    flags: Sequence[FlagSnapshot]
    messageRenderers: Sequence[str]
    providers: Sequence[ProviderSnapshot]
    flagValues: dict[str, bool | str]


# ==============================================================================
# Resulting mock state
# ==============================================================================


class RuntimeSnapshot(StrictModel):
    sessionName: str | None
    activeTools: Sequence[str]
    allTools: Sequence[ToolInfo]
    model: ModelRecord | None
    thinkingLevel: str
    entries: Sequence[JsonValue]


class SpecEcho(StrictModel):
    """Identifying fields of the mock spec the run used."""

    path: str
    schema_: str | None = pydantic.Field(alias='schema')
    extension_id: str | None


# ==============================================================================
# Terminal shapes
# ==============================================================================


class SuccessSnapshot(StrictModel):
    success: Literal[True] = True
    error: None = None
    load_time_ms: int
    spec: SpecEcho
    extension: ExtensionSnapshot
    runtime: RuntimeSnapshot
    capture: CaptureLog
    logs: Sequence[CapturedLog] | None = None


class FailureSnapshot(StrictModel):
    success: Literal[False] = False
    error: str
    extension: None = None
    load_time_ms: int | None
    logs: Sequence[CapturedLog] | None = None


Snapshot = SuccessSnapshot | FailureSnapshot


def render_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot as pretty-printed JSON (two-space indent)."""
    exclude = {'logs'} if snapshot.logs is None else None
    return snapshot.model_dump_json(indent=2, by_alias=True, exclude=exclude)
