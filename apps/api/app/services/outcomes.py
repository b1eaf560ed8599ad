from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from fastapi import HTTPException

T = TypeVar("T")


class FailureKind(str, Enum):
    not_found = "not_found"
    conflict = "conflict"
    invalid_argument = "invalid_argument"
    storage_failure = "storage_failure"
    cancelled = "cancelled"


class ConflictReason(str, Enum):
    duplicate_primary = "duplicate_primary"
    last_member = "last_member"
    promotion_failed = "promotion_failed"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    reason: ConflictReason | None = None
    entity: str | None = None

    @classmethod
    def not_found(cls, entity: str, key: object) -> Failure:
        return cls(FailureKind.not_found, f"{entity.lower()} {key} not found", entity=entity)

    @classmethod
    def conflict(cls, reason: ConflictReason, message: str) -> Failure:
        return cls(FailureKind.conflict, message, reason=reason)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or a tagged failure; exactly one of the two is set."""

    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> Outcome[T]:
        return cls(failure=failure)


_STATUS_BY_KIND = {
    FailureKind.not_found: 404,
    FailureKind.conflict: 409,
    FailureKind.invalid_argument: 400,
    FailureKind.storage_failure: 503,
    FailureKind.cancelled: 503,
}


def to_http_exception(failure: Failure) -> HTTPException:
    status_code = _STATUS_BY_KIND[failure.kind]
    if failure.reason == ConflictReason.promotion_failed:
        # Broken invariant, not a client error.
        status_code = 500
    return HTTPException(
        status_code=status_code,
        detail={
            "code": failure.kind.value,
            "reason": failure.reason.value if failure.reason else None,
            "message": failure.message,
        },
    )


def unwrap(outcome: Outcome[T]) -> T:
    """Return the value or raise the HTTPException matching the failure."""
    if outcome.failure is not None:
        raise to_http_exception(outcome.failure)
    return outcome.value  # type: ignore[return-value]
