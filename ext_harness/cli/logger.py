"""
CLI logger adapter - implements LoggerProtocol for command-line usage.

Writes to stderr: stdout is reserved for the snapshot document.
"""

from __future__ import annotations

import sys
from typing import TextIO


class CLILogger:
    """
    Logger implementation for CLI (implements LoggerProtocol from protocols).

    Outputs messages to stderr with optional verbose mode.
    """

    def __init__(self, verbose: bool = False, stream: TextIO | None = None) -> None:
        """
        Initialize CLI logger.

        Args:
            verbose: If True, show info messages. If False, only warnings/errors.
            stream: Destination stream, bound at construction so that console
                capture during a run does not swallow harness messages.
        """
        self.verbose = verbose
        self.stream = stream or sys.stderr

    def _emit(self, line: str) -> None:
        print(line, file=self.stream, flush=True)

    async def info(self, message: str) -> None:
        """Log info message (only if verbose)."""
        if self.verbose:
            self._emit(f'[INFO] {message}')

    async def warning(self, message: str) -> None:
        """Log warning message (only if verbose)."""
        if self.verbose:
            self._emit(f'[WARNING] {message}')

    async def error(self, message: str) -> None:
        """Log error message."""
        self._emit(f'[ERROR] {message}')
