"""
Console capture for extension output.

When enabled, text written to sys.stdout / sys.stderr and warnings issued
through the warnings module are recorded line by line instead of reaching the
real streams, so the snapshot stays the only thing on stdout.
"""

from __future__ import annotations

import contextlib
import io
import warnings
from types import TracebackType
from typing import TextIO

from ext_harness.schemas.snapshot import CapturedLog
from ext_harness.schemas.types import LogLevel

__all__ = ['ConsoleCapture']


class _LineRecorder(io.TextIOBase):
    """Text stream that turns each completed line into a CapturedLog."""

    def __init__(self, level: LogLevel, sink: list[CapturedLog]) -> None:
        self.level = level
        self.sink = sink
        self._pending = ''

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        self._pending += text
        while '\n' in self._pending:
            line, self._pending = self._pending.split('\n', 1)
            self.sink.append(CapturedLog(level=self.level, message=line))
        return len(text)

    def flush(self) -> None:
        if self._pending:
            self.sink.append(CapturedLog(level=self.level, message=self._pending))
            self._pending = ''


class ConsoleCapture:
    """Context manager recording console output while active (no-op when disabled)."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled
        self.records: list[CapturedLog] = []
        self._stack: contextlib.ExitStack | None = None
        self._streams: list[_LineRecorder] = []

    def _showwarning(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        self.records.append(CapturedLog(level='warn', message=f'{category.__name__}: {message}'))

    def __enter__(self) -> ConsoleCapture:
        if not self.enabled:
            return self
        stdout = _LineRecorder('log', self.records)
        stderr = _LineRecorder('error', self.records)
        self._streams = [stdout, stderr]

        stack = contextlib.ExitStack()
        stack.enter_context(contextlib.redirect_stdout(stdout))
        stack.enter_context(contextlib.redirect_stderr(stderr))
        stack.enter_context(warnings.catch_warnings())
        warnings.simplefilter('always')
        warnings.showwarning = self._showwarning
        self._stack = stack
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._stack is None:
            return
        for stream in self._streams:
            stream.flush()
        self._stack.close()
        self._stack = None

    def logs(self) -> list[CapturedLog] | None:
        """Captured lines, or None when capture is disabled (snapshot omits `logs`)."""
        return list(self.records) if self.enabled else None
