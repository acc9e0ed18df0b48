"""
Shared Pydantic base models.

Output models (capture log, snapshot) inherit from StrictModel.
Hand-written fixture input inherits from FixtureModel.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model with strict validation settings."""

    model_config = ConfigDict(
        extra='forbid',  # Raise error on unexpected fields
        strict=True,  # Strict type validation
        frozen=True,  # Immutable (cannot modify after creation)
        populate_by_name=True,
        protected_namespaces=(),
    )


class FixtureModel(BaseModel):
    """
    Base model for hand-written JSON fixtures.

    Unknown keys are ignored, so fixtures may carry notes or fields meant for
    other hosts. Values are coerced the way JSON input is, and a value of the
    wrong type still fails validation.
    """

    model_config = ConfigDict(
        extra='ignore',
        frozen=True,
        populate_by_name=True,
        protected_namespaces=(),
    )
