"""
Typed results of a single attempt.

An attempt either succeeds with the parsed JSON object, fails in a way that
may be retried (5xx, 429, network, malformed 2xx), or fails terminally
(4xx other than 429). The retry engine only inspects these values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class FailureKind(str, Enum):
    """Why an attempt failed."""

    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class Success:
    payload: dict[str, Any]


@dataclass(frozen=True)
class RetryableFailure:
    kind: FailureKind
    reason: str
    status_code: int | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TerminalFailure:
    kind: FailureKind
    reason: str
    status_code: int | None = None
    details: dict[str, Any] = field(default_factory=dict)


AttemptOutcome = Union[Success, RetryableFailure, TerminalFailure]
