"""
Extension API - the object an extension's `register(api)` receives.

Registration calls (`register_tool`, `on`, ...) record into the
LoadedExtension being built. Action calls (`send_message`, `exec`, ...) are
forwarded to the runtime's RuntimeActions adapter, which is how the harness
observes everything an extension does without it talking to a real host.
"""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from ext_harness.protocols import RuntimeActions, UIActions
from ext_harness.schemas.mock_spec import ExecResult, ToolInfo
from ext_harness.schemas.types import FlagType
from ext_harness.services.network import FetchSlot

__all__ = [
    'CommandDefinition',
    'ExtensionAPI',
    'ExtensionRuntime',
    'FlagDefinition',
    'LoadedExtension',
    'ProviderRegistration',
    'ShortcutDefinition',
    'ToolDefinition',
]

Handler = Callable[..., Any]


# ==============================================================================
# Registrations
# ==============================================================================


@dataclass
class ToolDefinition:
    """Tool an extension exposes to the model. `parameters` is a JSON schema."""

    name: str
    description: str | None = None
    label: str | None = None
    parameters: Any = None
    execute: Callable[..., Awaitable[Any]] | None = None


@dataclass
class CommandDefinition:
    name: str
    description: str | None = None
    handler: Handler | None = None
    user_facing: bool = False


@dataclass
class ShortcutDefinition:
    shortcut: str
    description: str | None = None
    handler: Handler | None = None


@dataclass
class FlagDefinition:
    name: str
    type: FlagType
    default: bool | str | None = None
    description: str | None = None


@dataclass
class ProviderRegistration:
    """Model provider registered during load; `config` is kept as given."""

    name: str
    config: Mapping[str, Any]


@dataclass
class LoadedExtension:
    """Everything one bundle registered, keyed by name in registration order."""

    path: str
    resolved_path: str
    handlers: dict[str, list[Handler]] = field(default_factory=dict)
    tools: dict[str, ToolDefinition] = field(default_factory=dict)
    commands: dict[str, CommandDefinition] = field(default_factory=dict)
    shortcuts: dict[str, ShortcutDefinition] = field(default_factory=dict)
    flags: dict[str, FlagDefinition] = field(default_factory=dict)
    message_renderers: dict[str, Handler] = field(default_factory=dict)


@dataclass
class ExtensionRuntime:
    """Runtime capability object shared by every extension of one load."""

    actions: RuntimeActions
    fetch: FetchSlot
    cwd: Path
    flag_values: dict[str, bool | str] = field(default_factory=dict)
    pending_provider_registrations: list[ProviderRegistration] = field(default_factory=list)


# ==============================================================================
# API facade
# ==============================================================================


class ExtensionAPI:
    """Facade handed to an extension's register() function."""

    def __init__(self, extension: LoadedExtension, runtime: ExtensionRuntime) -> None:
        self._extension = extension
        self._runtime = runtime

    @property
    def cwd(self) -> Path:
        return self._runtime.cwd

    @property
    def ui(self) -> UIActions:
        return self._runtime.actions.ui

    # --- Registration ---

    def on(self, event: str, handler: Handler) -> None:
        """Subscribe to a host event. Handlers are recorded, never fired by the harness."""
        self._extension.handlers.setdefault(event, []).append(handler)

    def register_tool(self, definition: ToolDefinition) -> None:
        self._extension.tools[definition.name] = definition

    def register_command(
        self,
        name: str,
        *,
        description: str | None = None,
        handler: Handler | None = None,
        user_facing: bool = False,
    ) -> None:
        self._extension.commands[name] = CommandDefinition(
            name=name, description=description, handler=handler, user_facing=user_facing
        )

    def register_shortcut(
        self,
        shortcut: str,
        *,
        description: str | None = None,
        handler: Handler | None = None,
    ) -> None:
        self._extension.shortcuts[shortcut] = ShortcutDefinition(
            shortcut=shortcut, description=description, handler=handler
        )

    def register_flag(
        self,
        name: str,
        *,
        type: FlagType,
        default: bool | str | None = None,
        description: str | None = None,
    ) -> None:
        """Declare a CLI flag. A default seeds the runtime's flag value."""
        self._extension.flags[name] = FlagDefinition(name=name, type=type, default=default, description=description)
        if default is not None:
            self._runtime.flag_values[name] = default

    def get_flag(self, name: str) -> bool | str | None:
        return self._runtime.flag_values.get(name)

    def register_message_renderer(self, custom_type: str, renderer: Handler) -> None:
        self._extension.message_renderers[custom_type] = renderer

    def register_provider(self, name: str, config: Mapping[str, Any]) -> None:
        self._runtime.pending_provider_registrations.append(ProviderRegistration(name=name, config=config))

    # --- Actions (forwarded to the runtime adapter) ---

    def send_message(self, message: Any, options: Any = None) -> None:
        self._runtime.actions.send_message(message, options)

    def send_user_message(self, content: Any, options: Any = None) -> None:
        self._runtime.actions.send_user_message(content, options)

    def append_entry(self, custom_type: str, data: Any = None) -> None:
        self._runtime.actions.append_entry(custom_type, data)

    def set_session_name(self, name: str) -> None:
        self._runtime.actions.set_session_name(name)

    def get_session_name(self) -> str | None:
        return self._runtime.actions.get_session_name()

    def set_label(self, entry_id: str, label: str | None = None) -> None:
        self._runtime.actions.set_label(entry_id, label)

    def get_active_tools(self) -> list[str]:
        return self._runtime.actions.get_active_tools()

    def get_all_tools(self) -> list[ToolInfo]:
        return self._runtime.actions.get_all_tools()

    def set_active_tools(self, tool_names: Sequence[str]) -> None:
        self._runtime.actions.set_active_tools(tool_names)

    async def set_model(self, model: Any) -> bool:
        return await self._runtime.actions.set_model(model)

    def get_thinking_level(self) -> str:
        return self._runtime.actions.get_thinking_level()

    def set_thinking_level(self, level: str) -> None:
        self._runtime.actions.set_thinking_level(level)

    async def exec(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        cwd: str | os.PathLike[str] | None = None,
        options: Any = None,
    ) -> ExecResult:
        """Run a process on the host. `cwd` defaults to the runtime's working directory."""
        working_dir = os.fspath(self._runtime.cwd if cwd is None else cwd)
        return await self._runtime.actions.exec(command, list(args), working_dir, options)

    async def fetch(
        self,
        url: str,
        *,
        method: str = 'GET',
        headers: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> httpx.Response:
        return await self._runtime.fetch(url, method=method, headers=headers, content=content)
