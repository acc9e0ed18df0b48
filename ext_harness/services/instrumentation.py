"""
Runtime instrumentation - the mock host adapter bound into the extension runtime.

Every mutating capability:
1. appends a capture entry (synchronously, before any await),
2. applies its effect to MockState when the governing accept_mutations flag
   is set (session flag and model flag are independent),
3. returns what a real host would return.

The get_* readers are pure and are not captured.

The parsed MockSpec is never written to; MockState holds the mutable copy
of session, tool and model state that the snapshot reports.
"""

from __future__ import annotations

import copy
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ext_harness.schemas.capture import (
    AppendEntryCapture,
    CaptureLog,
    ExecCapture,
    SendMessageCapture,
    SendUserMessageCapture,
    SetActiveToolsCapture,
    SetLabelCapture,
    SetModelCapture,
    SetSessionNameCapture,
    SetThinkingLevelCapture,
    UiCapture,
)
from ext_harness.schemas.mock_spec import (
    DEFAULT_THINKING_LEVEL,
    ExecResult,
    MockSpec,
    ModelRecord,
    ToolInfo,
    UiMock,
)
from ext_harness.schemas.types import JsonValue, to_json_value
from ext_harness.services.matchers import resolve_exec_result

__all__ = [
    'MockRuntimeActions',
    'MockState',
    'MockUI',
]


def _model_field(model: Any, keys: Sequence[str], fallback: str | None) -> str | None:
    """First non-None value among `keys`, read from a mapping or an object."""
    for key in keys:
        value = model.get(key) if isinstance(model, Mapping) else getattr(model, key, None)
        if value is not None:
            return str(value)
    return fallback


@dataclass
class MockState:
    """Mutable host state seeded from a mock spec."""

    session_name: str | None
    session_state: JsonValue
    entries: list[JsonValue] = field(default_factory=list)
    active_tools: list[str] = field(default_factory=list)
    all_tools: list[ToolInfo] = field(default_factory=list)
    model: ModelRecord | None = None
    thinking_level: str = DEFAULT_THINKING_LEVEL

    @classmethod
    def from_spec(cls, spec: MockSpec) -> MockState:
        return cls(
            session_name=spec.session.initial_name(),
            session_state=copy.deepcopy(spec.session.state),
            entries=copy.deepcopy(list(spec.session.entries)),
            active_tools=list(spec.tools.active_tools),
            all_tools=list(spec.tools.all_tools),
            model=spec.model.current,
            thinking_level=spec.model.thinking_level or DEFAULT_THINKING_LEVEL,
        )


class MockUI:
    """UI surface answering dialogs from the spec's ui section."""

    def __init__(self, mock: UiMock, capture: CaptureLog) -> None:
        self.mock = mock
        self.capture = capture

    def _record(self, op: str, payload: dict[str, Any], result: Any) -> Any:
        if self.mock.capture:
            self.capture.ui.append(UiCapture(op=op, payload=to_json_value(payload), result=to_json_value(result)))
        return result

    def _respond(self, op: str, default: Any) -> Any:
        return self.mock.responses[op] if op in self.mock.responses else default

    def notify(self, message: str, level: str = 'info') -> None:
        self._record('notify', {'message': message, 'level': level}, None)

    def set_status(self, key: str, text: str | None) -> None:
        self._record('set_status', {'key': key, 'text': text}, None)

    async def confirm(self, title: str, message: str) -> bool:
        result = self._respond('confirm', self.mock.confirm_default)
        return self._record('confirm', {'title': title, 'message': message}, result)

    async def select(self, title: str, options: Sequence[str]) -> str | None:
        result = self._respond('select', self.mock.dialog_default)
        return self._record('select', {'title': title, 'options': list(options)}, result)

    async def input(self, title: str, placeholder: str | None = None) -> str | None:
        result = self._respond('input', self.mock.dialog_default)
        return self._record('input', {'title': title, 'placeholder': placeholder}, result)


class MockRuntimeActions:
    """RuntimeActions adapter that records every call and applies gated mutations."""

    def __init__(self, spec: MockSpec, state: MockState, capture: CaptureLog) -> None:
        self.spec = spec
        self.state = state
        self.capture = capture
        self.ui = MockUI(spec.ui, capture)

    @property
    def accept_session_mutations(self) -> bool:
        return self.spec.session.accept_mutations

    @property
    def accept_model_mutations(self) -> bool:
        return self.spec.model.accept_mutations

    # --- Messages ---

    def send_message(self, message: Any, options: Any = None) -> None:
        self.capture.sendMessage.append(
            SendMessageCapture(message=to_json_value(message), options=to_json_value(options))
        )

    def send_user_message(self, content: Any, options: Any = None) -> None:
        self.capture.sendUserMessage.append(
            SendUserMessageCapture(content=to_json_value(content), options=to_json_value(options))
        )

    # --- Session ---

    def append_entry(self, custom_type: str, data: Any = None) -> None:
        custom_type = str(custom_type)
        data = to_json_value(data)
        self.capture.appendEntry.append(AppendEntryCapture(customType=custom_type, data=data))
        if self.accept_session_mutations:
            self.state.entries.append({'customType': custom_type, 'data': copy.deepcopy(data)})

    def set_session_name(self, name: str) -> None:
        name = str(name)
        self.capture.setSessionName.append(SetSessionNameCapture(name=name))
        if self.accept_session_mutations:
            self.state.session_name = name
            if isinstance(self.state.session_state, dict):
                self.state.session_state['sessionName'] = name

    def get_session_name(self) -> str | None:
        return self.state.session_name

    def set_label(self, entry_id: str, label: str | None = None) -> None:
        entry_id = str(entry_id)
        label = None if label is None else str(label)
        self.capture.setLabel.append(SetLabelCapture(entryId=entry_id, label=label))

    # --- Tools ---

    def get_active_tools(self) -> list[str]:
        return list(self.state.active_tools)

    def get_all_tools(self) -> list[ToolInfo]:
        return list(self.state.all_tools)

    def set_active_tools(self, tool_names: Sequence[str]) -> None:
        tools = [str(name) for name in tool_names]
        self.capture.setActiveTools.append(SetActiveToolsCapture(tools=tools))
        if self.accept_session_mutations:
            self.state.active_tools = list(tools)

    # --- Model ---

    async def set_model(self, model: Any) -> bool:
        self.capture.setModel.append(SetModelCapture(model=to_json_value(model)))
        if self.accept_model_mutations:
            current = self.state.model or ModelRecord()
            self.state.model = ModelRecord(
                provider=_model_field(model, ('provider',), current.provider),
                model_id=_model_field(model, ('id', 'model_id'), current.model_id),
                name=_model_field(model, ('name',), current.name),
            )
        return True

    def get_thinking_level(self) -> str:
        return self.state.thinking_level

    def set_thinking_level(self, level: str) -> None:
        level = str(level)
        self.capture.setThinkingLevel.append(SetThinkingLevelCapture(level=level))
        if self.accept_model_mutations:
            self.state.thinking_level = level

    # --- Processes ---

    async def exec(
        self, command: str, args: Sequence[str], cwd: str | os.PathLike[str], options: Any = None
    ) -> ExecResult:
        command = str(command)
        cwd = os.fspath(cwd)
        args = [str(arg) for arg in args]
        result, matched = resolve_exec_result(self.spec.exec, command, args)
        self.capture.exec.append(
            ExecCapture(
                command=command,
                args=args,
                cwd=cwd,
                matched=matched,
                stdout=result.stdout,
                stderr=result.stderr,
                code=result.code,
                killed=result.killed or False,
            )
        )
        return result.model_copy()
