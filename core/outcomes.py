"""
Typed operation outcomes.

Server-side operations (status updates, contact messages, visit beacons,
checkout validation) return an ``Outcome`` instead of raising, so callers can
branch on the kind of failure. Routers turn outcomes into HTTP responses via
``core.routers.deps.outcome_response``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.errors import ERROR_INTERNAL, ERROR_TOO_MANY_REQUESTS, ERROR_UNAUTHORIZED


class OutcomeKind(str, Enum):
    OK = "ok"
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


STATUS_CODES: dict[OutcomeKind, int] = {
    OutcomeKind.OK: 200,
    OutcomeKind.VALIDATION: 400,
    OutcomeKind.UNAUTHORIZED: 401,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.RATE_LIMITED: 429,
    OutcomeKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class Outcome:
    """Result of a server-side operation."""

    kind: OutcomeKind
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @classmethod
    def success(cls, data: Any = None) -> "Outcome":
        return cls(OutcomeKind.OK, data=data)

    @classmethod
    def validation(cls, error: str) -> "Outcome":
        return cls(OutcomeKind.VALIDATION, error=error)

    @classmethod
    def unauthorized(cls, error: str = ERROR_UNAUTHORIZED) -> "Outcome":
        return cls(OutcomeKind.UNAUTHORIZED, error=error)

    @classmethod
    def not_found(cls, error: str) -> "Outcome":
        return cls(OutcomeKind.NOT_FOUND, error=error)

    @classmethod
    def rate_limited(cls, error: str = ERROR_TOO_MANY_REQUESTS) -> "Outcome":
        return cls(OutcomeKind.RATE_LIMITED, error=error)

    @classmethod
    def internal(cls, error: str = ERROR_INTERNAL) -> "Outcome":
        return cls(OutcomeKind.INTERNAL, error=error)


__all__ = ["Outcome", "OutcomeKind", "STATUS_CODES"]
