#!/usr/bin/env python3
"""
Command-line interface for ext-harness.

Runs one extension bundle against a mock spec and prints the snapshot:

    ext-harness path/to/extension.py path/to/mock_spec.json [cwd]

The exit status does not reflect the snapshot's `success` field; callers
inspect the document. Missing positional arguments exit non-zero with usage.
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

import typer

from ext_harness.cli.logger import CLILogger
from ext_harness.config import HarnessSettings, get_settings
from ext_harness.schemas.snapshot import render_snapshot
from ext_harness.services.harness import run_harness

app = typer.Typer(
    name='ext-harness',
    help='Load an extension bundle into a mocked host and emit a deterministic snapshot',
    add_completion=False,
)


@app.command()
def run(
    extension: Path = typer.Argument(..., help='Extension bundle (.py file or package directory)'),
    spec: Path = typer.Argument(..., help='Mock spec JSON file'),
    cwd: Path | None = typer.Argument(None, help='Working directory for the extension (default: current)'),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Log progress to stderr'),
) -> None:
    """Load EXTENSION with the host mocked per SPEC and print the snapshot as JSON."""
    settings = get_settings(HarnessSettings)
    logger = CLILogger(verbose=verbose)

    snapshot = asyncio.run(
        run_harness(
            extension.resolve(),
            spec.resolve(),
            cwd.resolve() if cwd is not None else Path.cwd(),
            settings=settings,
            logger=logger,
        )
    )
    typer.echo(render_snapshot(snapshot))

    if settings.FORCE_EXIT:
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(0)


def main() -> None:
    app()


if __name__ == '__main__':
    main()
