"""Domain Types — the User entity and the repository Outcome result type.

Invariants:
    - User carries password_hash; it never leaves the service layer (see UserView)
    - Outcome.success is False whenever a failure category is set
    - Outcome.payload is None on every failure

Design Decisions:
    - Frozen dataclasses: outcomes and entities are values, never mutated after decode
    - Outcome over exceptions: not-found and duplicate email are routine results
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, NewType, TypeVar

from registration_api.core.errors import ErrorCategory

UserId = NewType("UserId", int)

T = TypeVar("T")


@dataclass(frozen=True)
class User:
    """A user row as reported by the store."""
    id: UserId
    full_name: str
    email: str
    phone: str
    created_at: datetime | None = None
    password_hash: str = ""


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one repository call: (success, message, payload)."""
    success: bool
    message: str
    payload: T | None = None
    category: ErrorCategory | None = None

    @classmethod
    def ok(cls, message: str, payload: T | None = None) -> "Outcome[T]":
        return cls(True, message, payload)

    @classmethod
    def fail(
        cls, message: str, category: ErrorCategory = ErrorCategory.BUSINESS_RULE,
    ) -> "Outcome[T]":
        return cls(False, message, None, category)
