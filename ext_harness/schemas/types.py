"""
Shared type definitions for schemas.

Centralizes common type annotations used across the mock spec, capture and
snapshot schemas.
"""

from __future__ import annotations

from typing import Any, Literal

import pydantic
from pydantic_core import to_jsonable_python

# Arbitrary JSON document (fixture blobs, captured call arguments)
JsonValue = pydantic.JsonValue

# Console stream a captured log line came from
LogLevel = Literal['log', 'warn', 'error']

# Value types a registered flag can hold
FlagType = Literal['boolean', 'string']


def to_json_value(value: Any) -> JsonValue:
    """Convert an argument received from extension code into a JSON-compatible value.

    Objects without a JSON representation degrade to their str() form so a
    capture entry never fails to serialize.
    """
    return to_jsonable_python(value, fallback=str)
