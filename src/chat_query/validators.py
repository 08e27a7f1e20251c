"""Caller-side checks for documented API limits.

The wire models accept any value their types allow. Ranges the API
documents are left to callers, and these helpers apply them before
sending a request. Nothing in chat_query calls them implicitly.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from chat_query.models.query import ChatQuery

FUNCTION_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")
"""Allowed tool function names: letters, digits, underscore, dash; 1-64 chars."""

TEMPERATURE_RANGE = (0.0, 2.0)
TOP_P_RANGE = (0.0, 1.0)
PENALTY_RANGE = (-2.0, 2.0)
LOGIT_BIAS_RANGE = (-100, 100)
TOP_LOGPROBS_RANGE = (0, 20)


def is_valid_function_name(name: str) -> bool:
    """Check a tool function name against FUNCTION_NAME_PATTERN."""
    return FUNCTION_NAME_PATTERN.fullmatch(name) is not None


def _out_of_range(
    label: str, value: float | None, bounds: tuple[float, float]
) -> Iterable[str]:
    if value is None:
        return
    low, high = bounds
    if not low <= value <= high:
        yield f"{label} must be between {low} and {high}, got {value}"


def find_range_violations(query: ChatQuery) -> list[str]:
    """List every documented limit the request breaks.

    Args:
        query: Request to check.

    Returns:
        Human-readable violation messages, empty when the request is within
        all documented limits.
    """
    violations: list[str] = []
    violations.extend(_out_of_range("temperature", query.temperature, TEMPERATURE_RANGE))
    violations.extend(_out_of_range("top_p", query.top_p, TOP_P_RANGE))
    violations.extend(
        _out_of_range("frequency_penalty", query.frequency_penalty, PENALTY_RANGE)
    )
    violations.extend(_out_of_range("presence_penalty", query.presence_penalty, PENALTY_RANGE))
    violations.extend(_out_of_range("top_logprobs", query.top_logprobs, TOP_LOGPROBS_RANGE))

    for token_id, bias in (query.logit_bias or {}).items():
        violations.extend(_out_of_range(f"logit_bias[{token_id}]", bias, LOGIT_BIAS_RANGE))

    if query.n is not None and query.n < 1:
        violations.append(f"n must be >= 1, got {query.n}")
    if query.max_tokens is not None and query.max_tokens < 1:
        violations.append(f"max_tokens must be >= 1, got {query.max_tokens}")
    if query.top_logprobs is not None and not query.logprobs:
        violations.append("top_logprobs requires logprobs=true")

    for tool_param in query.tools or ():
        name = tool_param.function.name
        if not is_valid_function_name(name):
            violations.append(
                f"function name {name!r} must match {FUNCTION_NAME_PATTERN.pattern}"
            )
    return violations


__all__ = [
    "FUNCTION_NAME_PATTERN",
    "find_range_violations",
    "is_valid_function_name",
]
