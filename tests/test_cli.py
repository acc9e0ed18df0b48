"""Tests for the ext-harness command line."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from ext_harness.cli.main import app

from tests.conftest import EXTENSIONS_DIR, SPECS_DIR

runner = CliRunner()
ENV = {'EXT_HARNESS_FORCE_EXIT': '0', 'EXT_HARNESS_CAPTURE_LOGS': '0'}


def test_missing_arguments_exit_with_usage() -> None:
    result = runner.invoke(app, [str(EXTENSIONS_DIR / 'minimal_tool.py')], env=ENV)

    assert result.exit_code != 0
    assert 'Usage' in result.output


def test_prints_one_success_document(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        [str(EXTENSIONS_DIR / 'minimal_tool.py'), str(SPECS_DIR / 'fire_sequence.json'), str(tmp_path)],
        env=ENV,
    )

    assert result.exit_code == 0
    document = json.loads(result.stdout)
    assert document['success'] is True
    assert document['extension']['tools'][0]['name'] == 'greet'
    assert document['spec']['extension_id'] == 'minimal-tool'
    assert document['capture']['warnings']


def test_failed_load_still_exits_zero() -> None:
    result = runner.invoke(
        app,
        [str(EXTENSIONS_DIR / 'no_register.py'), str(SPECS_DIR / 'empty.json')],
        env=ENV,
    )

    assert result.exit_code == 0
    document = json.loads(result.stdout)
    assert document['success'] is False
    assert document['extension'] is None


def test_capture_logs_toggle_adds_logs() -> None:
    result = runner.invoke(
        app,
        [str(EXTENSIONS_DIR / 'noisy.py'), str(SPECS_DIR / 'empty.json')],
        env={**ENV, 'EXT_HARNESS_CAPTURE_LOGS': '1'},
    )

    assert result.exit_code == 0
    document = json.loads(result.stdout)
    assert [entry['message'] for entry in document['logs']][:2] == ['hello from extension', 'second line']
