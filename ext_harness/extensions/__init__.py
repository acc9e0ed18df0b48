"""
Extension loading: the API handed to bundles and the Python bundle loader.
"""

from __future__ import annotations

from ext_harness.extensions.api import (
    CommandDefinition,
    ExtensionAPI,
    ExtensionRuntime,
    FlagDefinition,
    LoadedExtension,
    ProviderRegistration,
    ShortcutDefinition,
    ToolDefinition,
)
from ext_harness.extensions.loader import LoadError, LoadResult, PythonExtensionLoader

__all__ = [
    'CommandDefinition',
    'ExtensionAPI',
    'ExtensionRuntime',
    'FlagDefinition',
    'LoadError',
    'LoadResult',
    'LoadedExtension',
    'ProviderRegistration',
    'PythonExtensionLoader',
    'ShortcutDefinition',
    'ToolDefinition',
]
