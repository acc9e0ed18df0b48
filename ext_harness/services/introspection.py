"""
Introspection of what an extension declared.

Reads registrations off a LoadedExtension and the shared runtime without
invoking any of them: executors and handlers are reported only as present or
absent.
"""

from __future__ import annotations

from collections.abc import Mapping

from ext_harness.extensions.api import ExtensionRuntime, LoadedExtension, ProviderRegistration
from ext_harness.schemas.snapshot import (
    CommandSnapshot,
    ExtensionSnapshot,
    FlagSnapshot,
    ProviderModelSnapshot,
    ProviderSnapshot,
    RuntimeSnapshot,
    ShortcutSnapshot,
    ToolSnapshot,
)
from ext_harness.schemas.types import to_json_value
from ext_harness.services.instrumentation import MockState


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def describe_provider(registration: ProviderRegistration) -> ProviderSnapshot:
    """Provider name plus the id/name of each declared model."""
    models = registration.config.get('models') or []
    return ProviderSnapshot(
        name=registration.name,
        models=[
            ProviderModelSnapshot(id=_optional_str(m.get('id')), name=_optional_str(m.get('name')))
            for m in models
            if isinstance(m, Mapping)
        ],
    )


def describe_extension(extension: LoadedExtension, runtime: ExtensionRuntime) -> ExtensionSnapshot:
    """Build the declared-capabilities block of a success snapshot."""
    return ExtensionSnapshot(
        path=extension.path,
        resolvedPath=extension.resolved_path,
        handlers={event: len(fns) for event, fns in extension.handlers.items()},
        tools=[
            ToolSnapshot(
                name=tool.name,
                label=tool.label,
                description=tool.description,
                parameters=to_json_value(tool.parameters),
                hasExecute=callable(tool.execute),
            )
            for tool in extension.tools.values()
        ],
        commands=[
            CommandSnapshot(
                name=cmd.name,
                description=cmd.description,
                userFacing=cmd.user_facing,
                hasHandler=callable(cmd.handler),
            )
            for cmd in extension.commands.values()
        ],
        shortcuts=[
            ShortcutSnapshot(shortcut=sc.shortcut, description=sc.description, hasHandler=callable(sc.handler))
            for sc in extension.shortcuts.values()
        ],
        flags=[
            FlagSnapshot(name=flag.name, type=flag.type, default=flag.default, description=flag.description)
            for flag in extension.flags.values()
        ],
        messageRenderers=list(extension.message_renderers),
        providers=[describe_provider(p) for p in runtime.pending_provider_registrations],
        flagValues=dict(runtime.flag_values),
    )


def describe_runtime(state: MockState) -> RuntimeSnapshot:
    """Build the resulting-mock-state block of a success snapshot."""
    return RuntimeSnapshot(
        sessionName=state.session_name,
        activeTools=list(state.active_tools),
        allTools=list(state.all_tools),
        model=state.model,
        thinkingLevel=state.thinking_level,
        entries=list(state.entries),
    )
