"""
Shared protocols for ext-harness.

This module contains the Protocol definitions the harness is wired through:
- LoggerProtocol: async logging sink (CLI or null)
- UIActions / RuntimeActions: the host capabilities an extension calls into
- ExtensionLoader: resolves bundle paths into loaded extensions

Having a single source of truth for protocols prevents type incompatibility
issues when the same protocol is used by several modules.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ext_harness.schemas.mock_spec import ExecResult, ToolInfo

if TYPE_CHECKING:
    from ext_harness.extensions.loader import LoadResult
    from ext_harness.services.network import FetchSlot


class LoggerProtocol(Protocol):
    """
    Protocol for async logger - enables services to work with any logging implementation.

    Implementations:
    - CLILogger (cli/logger.py): Logs to stderr with optional verbose mode
    - NullLogger (below): No-op implementation for when logging is optional
    """

    async def info(self, message: str) -> None: ...
    async def warning(self, message: str) -> None: ...
    async def error(self, message: str) -> None: ...


class NullLogger:
    """
    No-op logger implementation for when logging is optional.

    Use this when a function requires a LoggerProtocol but the caller
    doesn't need logging output.
    """

    async def info(self, message: str) -> None:
        pass

    async def warning(self, message: str) -> None:
        pass

    async def error(self, message: str) -> None:
        pass


class UIActions(Protocol):
    """Host UI surface. Dialog methods are async, notifications are fire-and-forget."""

    def notify(self, message: str, level: str = 'info') -> None: ...
    def set_status(self, key: str, text: str | None) -> None: ...
    async def confirm(self, title: str, message: str) -> bool: ...
    async def select(self, title: str, options: Sequence[str]) -> str | None: ...
    async def input(self, title: str, placeholder: str | None = None) -> str | None: ...


class RuntimeActions(Protocol):
    """
    Host capabilities an extension may call into.

    Mutating methods are the auditable surface; the get_* readers have no
    side effects.
    """

    ui: UIActions

    def send_message(self, message: Any, options: Any = None) -> None: ...
    def send_user_message(self, content: Any, options: Any = None) -> None: ...
    def append_entry(self, custom_type: str, data: Any = None) -> None: ...
    def set_session_name(self, name: str) -> None: ...
    def get_session_name(self) -> str | None: ...
    def set_label(self, entry_id: str, label: str | None = None) -> None: ...
    def get_active_tools(self) -> list[str]: ...
    def get_all_tools(self) -> list[ToolInfo]: ...
    def set_active_tools(self, tool_names: Sequence[str]) -> None: ...
    async def set_model(self, model: Any) -> bool: ...
    def get_thinking_level(self) -> str: ...
    def set_thinking_level(self, level: str) -> None: ...
    async def exec(
        self, command: str, args: Sequence[str], cwd: str | os.PathLike[str], options: Any = None
    ) -> ExecResult: ...


class ExtensionLoader(Protocol):
    """Resolves bundle paths and runs their registration against a runtime."""

    async def load(
        self,
        paths: Sequence[Path],
        cwd: Path,
        *,
        actions: RuntimeActions,
        fetch: FetchSlot,
    ) -> LoadResult: ...
