"""
Tests for mock spec fixtures.

These tests validate that every fixture in fixtures/specs/ parses with the
MockSpec model (or fails, when the manifest lists it as invalid). This serves
multiple purposes:

1. Regression testing - ensures schema changes don't break existing fixtures
2. Documentation - fixtures demonstrate real-world spec shapes
3. CI integration - runs without any extension installed
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ext_harness.exceptions import MockSpecError
from ext_harness.schemas.mock_spec import load_mock_spec

from tests.conftest import FIXTURES_DIR, SPECS_DIR

MANIFEST_PATH = SPECS_DIR / 'manifest.json'


def load_manifest() -> dict[str, object]:
    with open(MANIFEST_PATH) as f:
        return json.load(f)


def get_spec_fixtures() -> list[Path]:
    """Get all spec fixture files (the manifest itself excluded)."""
    if not SPECS_DIR.exists():
        return []
    return sorted(p for p in SPECS_DIR.glob('*.json') if p != MANIFEST_PATH)


def invalid_fixture_names() -> set[str]:
    if not MANIFEST_PATH.exists():
        return set()
    return set(load_manifest().get('invalid', []))  # type: ignore[arg-type]


@pytest.mark.parametrize(
    'fixture_path',
    get_spec_fixtures(),
    ids=lambda p: p.name,
)
def test_spec_fixture_validates(fixture_path: Path) -> None:
    """Each spec fixture must validate, unless the manifest marks it invalid."""
    if fixture_path.name in invalid_fixture_names():
        with pytest.raises(MockSpecError):
            load_mock_spec(fixture_path)
    else:
        load_mock_spec(fixture_path)


def test_fixtures_directory_exists() -> None:
    """Verify fixtures directory structure exists."""
    assert FIXTURES_DIR.exists(), 'fixtures/ directory not found'
    assert SPECS_DIR.exists(), 'fixtures/specs/ directory not found'


def test_specs_have_manifest() -> None:
    """Verify specs/ has a manifest.json documenting the fixtures."""
    assert MANIFEST_PATH.exists(), 'fixtures/specs/manifest.json not found'

    manifest = load_manifest()
    assert 'fixtures' in manifest, 'manifest.json missing "fixtures" key'

    # Verify each fixture in the directory is documented in manifest
    fixture_files = {p.name for p in get_spec_fixtures()}
    documented_fixtures = set(manifest['fixtures'].keys())  # type: ignore[attr-defined]

    undocumented = fixture_files - documented_fixtures
    assert not undocumented, f'Fixtures not documented in manifest: {undocumented}'
