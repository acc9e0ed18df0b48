"""
Rule matchers for simulated exec and HTTP calls.

Matching is exact: equal command (and, when the rule has an args filter,
same-length pointwise-equal args) for exec; case-insensitive method and
identical URL string for HTTP. First matching rule wins. No wildcards and no
prefix matching.

Resolution falls back in three tiers: matching rule -> the section's
default_* value -> the synthetic defaults below. The synthetic defaults mark
calls the fixture never mocked.
"""

from __future__ import annotations

from collections.abc import Sequence

from ext_harness.schemas.mock_spec import (
    ExecMock,
    ExecResult,
    ExecRule,
    HttpMock,
    HttpResponse,
    HttpRule,
)

__all__ = [
    'SYNTHETIC_EXEC_RESULT',
    'SYNTHETIC_HTTP_RESPONSE',
    'match_exec_rule',
    'match_http_rule',
    'resolve_exec_result',
    'resolve_http_response',
]

SYNTHETIC_EXEC_RESULT = ExecResult(stdout='', stderr='mock: command not found', code=127, killed=False)
SYNTHETIC_HTTP_RESPONSE = HttpResponse(status=404, body='mock: no HTTP rule matched')


def _args_match(expected: Sequence[str] | None, actual: Sequence[str]) -> bool:
    if expected is None:
        return True
    if len(expected) != len(actual):
        return False
    return all(want == got for want, got in zip(expected, actual))


def match_exec_rule(rules: Sequence[ExecRule], command: str, args: Sequence[str]) -> ExecRule | None:
    """First rule for `command` whose args filter (if any) equals `args`."""
    for rule in rules:
        if rule.command == command and _args_match(rule.args, args):
            return rule
    return None


def match_http_rule(rules: Sequence[HttpRule], method: str, url: str) -> HttpRule | None:
    """First rule with the same method (any case) and the identical URL."""
    wanted = method.upper()
    for rule in rules:
        if rule.method.upper() == wanted and rule.url == url:
            return rule
    return None


def resolve_exec_result(mock: ExecMock, command: str, args: Sequence[str]) -> tuple[ExecResult, bool]:
    """Resolve the result of an exec call.

    Returns:
        (result, matched) - matched is False whenever a default was used
    """
    rule = match_exec_rule(mock.rules, command, args)
    if rule is not None:
        return rule.result, True
    if mock.default_result is not None:
        return mock.default_result, False
    return SYNTHETIC_EXEC_RESULT, False


def resolve_http_response(mock: HttpMock, method: str, url: str) -> tuple[HttpResponse, bool]:
    """Resolve the response of an HTTP call.

    Returns:
        (response, matched) - matched is False whenever a default was used
    """
    rule = match_http_rule(mock.rules, method, url)
    if rule is not None:
        return rule.response, True
    if mock.default_response is not None:
        return mock.default_response, False
    return SYNTHETIC_HTTP_RESPONSE, False
