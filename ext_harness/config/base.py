"""
Base configuration for ext-harness.

Settings are read from the environment (optionally a .env file) with
pydantic-settings.
"""

from __future__ import annotations

import os
import pathlib
from typing import TypeVar

import pydantic_settings

T = TypeVar('T', bound=pydantic_settings.BaseSettings)


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Factory for creating settings with dynamic .env file loading.

    LOAD_ENV_FILE environment variable specifies custom .env file path.
    When unset, loads from environment variables only.

    Args:
        settings_class: Settings class to instantiate
        env_file: Optional path to .env file (overrides LOAD_ENV_FILE)

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If specified .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class()  # No .env file, load from environment only

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)
