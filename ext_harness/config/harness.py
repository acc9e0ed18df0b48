"""
Harness run configuration.

Environment toggles:
- EXT_HARNESS_CAPTURE_LOGS: record extension console output into the
  snapshot's `logs` and keep it off the real streams
- EXT_HARNESS_FORCE_EXIT: terminate the process right after the CLI emits
  its snapshot (anything an extension left running dies with it)
"""

from __future__ import annotations

import pydantic_settings


class HarnessSettings(pydantic_settings.BaseSettings):
    """Configuration for one harness invocation."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix='EXT_HARNESS_',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='ignore',  # .env files may carry unrelated variables
    )

    CAPTURE_LOGS: bool = False
    FORCE_EXIT: bool = True
