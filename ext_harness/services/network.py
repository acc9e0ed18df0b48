"""
Network-call capability exposed to extensions.

Extensions never reach the network directly: `api.fetch()` goes through a
FetchSlot. The harness installs a MockFetch into the slot for the duration of
one run and the slot restores the previous capability on exit, whatever the
exit path.
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator, Mapping
from typing import Protocol, runtime_checkable

import httpx

from ext_harness.schemas.capture import CaptureLog, HttpCapture
from ext_harness.schemas.mock_spec import HttpMock
from ext_harness.services.matchers import resolve_http_response

__all__ = [
    'FetchCapability',
    'FetchSlot',
    'HttpxFetch',
    'MockFetch',
    'ambient_fetch',
]


@runtime_checkable
class FetchCapability(Protocol):
    """Protocol for performing one HTTP request on behalf of an extension."""

    async def __call__(
        self,
        url: str,
        *,
        method: str = 'GET',
        headers: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> httpx.Response: ...


class HttpxFetch:
    """Real network access over httpx."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    async def __call__(
        self,
        url: str,
        *,
        method: str = 'GET',
        headers: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.request(method.upper(), url, headers=headers, content=content)
            await response.aread()
            return response


class MockFetch:
    """Resolves HTTP calls against the mock spec and records each one."""

    def __init__(self, mock: HttpMock, capture: CaptureLog) -> None:
        self.mock = mock
        self.capture = capture

    async def __call__(
        self,
        url: str,
        *,
        method: str = 'GET',
        headers: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> httpx.Response:
        method = method.upper()
        response, matched = resolve_http_response(self.mock, method, url)
        self.capture.http.append(HttpCapture(method=method, url=url, matched=matched, response=response))
        return httpx.Response(
            status_code=response.status,
            headers=response.headers or {},
            text=response.body or '',
            request=httpx.Request(method, url, headers=headers, content=content),
        )


class FetchSlot:
    """Holder for the fetch capability currently in effect."""

    def __init__(self, capability: FetchCapability) -> None:
        self.current = capability

    async def __call__(
        self,
        url: str,
        *,
        method: str = 'GET',
        headers: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> httpx.Response:
        return await self.current(url, method=method, headers=headers, content=content)

    @contextlib.contextmanager
    def installed(self, capability: FetchCapability) -> Iterator[FetchCapability]:
        """Swap `capability` in; the previous one is restored on exit."""
        previous = self.current
        self.current = capability
        try:
            yield capability
        finally:
            self.current = previous


# Process-wide default slot (real network)
ambient_fetch = FetchSlot(HttpxFetch())
