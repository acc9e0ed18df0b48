"""
Capture log schema.

One append-only, insertion-ordered sequence per instrumented call category,
plus a warnings sequence. Field names match the snapshot JSON keys.

Ordering contract: within a category, entries appear in the order the
instrumentation layer observed the calls. No order is defined across
categories.
"""

from __future__ import annotations

import pydantic

from ext_harness.base_model import StrictModel
from ext_harness.schemas.mock_spec import HttpResponse
from ext_harness.schemas.types import JsonValue

__all__ = [
    'AppendEntryCapture',
    'CaptureLog',
    'ExecCapture',
    'HttpCapture',
    'SendMessageCapture',
    'SendUserMessageCapture',
    'SetActiveToolsCapture',
    'SetLabelCapture',
    'SetModelCapture',
    'SetSessionNameCapture',
    'SetThinkingLevelCapture',
    'UiCapture',
]


class SendMessageCapture(StrictModel):
    message: JsonValue
    options: JsonValue = None


class SendUserMessageCapture(StrictModel):
    content: JsonValue
    options: JsonValue = None


class AppendEntryCapture(StrictModel):
    customType: str
    data: JsonValue = None


class SetSessionNameCapture(StrictModel):
    name: str


class SetLabelCapture(StrictModel):
    entryId: str
    label: str | None = None


class SetActiveToolsCapture(StrictModel):
    tools: list[str]


class SetModelCapture(StrictModel):
    model: JsonValue


class SetThinkingLevelCapture(StrictModel):
    level: str


class ExecCapture(StrictModel):
    """Exec call plus the resolved result, flattened."""

    command: str
    args: list[str]
    cwd: str
    matched: bool
    stdout: str
    stderr: str
    code: int
    killed: bool


class HttpCapture(StrictModel):
    method: str  # Upper-cased
    url: str
    matched: bool
    response: HttpResponse

    @pydantic.field_serializer('response')
    def _serialize_response(self, response: HttpResponse) -> dict[str, JsonValue]:
        # Absent headers/body are omitted rather than rendered as null
        return response.model_dump(exclude_none=True)


class UiCapture(StrictModel):
    op: str
    payload: JsonValue = None
    result: JsonValue = None


class CaptureLog(pydantic.BaseModel):
    """
    Every side-effecting call observed during one harness run.

    Mutable container: the instrumentation layer appends, nothing removes.
    """

    model_config = pydantic.ConfigDict(extra='forbid')

    sendMessage: list[SendMessageCapture] = pydantic.Field(default_factory=list)
    sendUserMessage: list[SendUserMessageCapture] = pydantic.Field(default_factory=list)
    appendEntry: list[AppendEntryCapture] = pydantic.Field(default_factory=list)
    setSessionName: list[SetSessionNameCapture] = pydantic.Field(default_factory=list)
    setLabel: list[SetLabelCapture] = pydantic.Field(default_factory=list)
    setActiveTools: list[SetActiveToolsCapture] = pydantic.Field(default_factory=list)
    setModel: list[SetModelCapture] = pydantic.Field(default_factory=list)
    setThinkingLevel: list[SetThinkingLevelCapture] = pydantic.Field(default_factory=list)
    exec: list[ExecCapture] = pydantic.Field(default_factory=list)
    http: list[HttpCapture] = pydantic.Field(default_factory=list)
    ui: list[UiCapture] = pydantic.Field(default_factory=list)
    warnings: list[str] = pydantic.Field(default_factory=list)
