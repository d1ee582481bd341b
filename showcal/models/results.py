"""Tagged result returned by the show data queries.

A query either found data, legitimately found nothing (no matching shows,
no known future episodes), or failed upstream. Callers branch on
`status` instead of guessing from an empty list.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from showcal.utils.exceptions import ShowCalError

T = TypeVar("T")


class QueryStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of a show data query.

    Exactly one of `data` (FOUND) or `error` (FAILED) is set; NOT_FOUND
    carries only a human-readable `reason`.
    """
    status: QueryStatus
    data: T | None = None
    error: ShowCalError | None = None
    reason: str = ""

    @classmethod
    def found(cls, data: T) -> QueryResult[T]:
        return cls(status=QueryStatus.FOUND, data=data)

    @classmethod
    def not_found(cls, reason: str) -> QueryResult[T]:
        return cls(status=QueryStatus.NOT_FOUND, reason=reason)

    @classmethod
    def failed(cls, error: ShowCalError) -> QueryResult[T]:
        return cls(status=QueryStatus.FAILED, error=error, reason=str(error))

    @property
    def is_found(self) -> bool:
        return self.status is QueryStatus.FOUND
