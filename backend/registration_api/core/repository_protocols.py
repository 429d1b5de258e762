"""Boundary Protocols — the contract between the service layer and the store.

Invariants:
    - Services depend on UserRepository, never on SQLAlchemy
    - Every method returns an Outcome; none raises for routine failures

Design Decisions:
    - Protocol over ABC: the fake repositories in tests satisfy it structurally
"""

from typing import Protocol

from registration_api.core.domain_types import Outcome, User, UserId


class UserRepository(Protocol):
    """Contract for user persistence — implemented in infrastructure/."""
    async def create_user(
        self, full_name: str, email: str, phone: str, password_hash: str,
    ) -> Outcome[UserId]: ...
    async def get_all_users(self) -> Outcome[list[User]]: ...
    async def get_user_by_id(self, user_id: int) -> Outcome[User]: ...
    async def update_user(
        self, user_id: int, full_name: str, email: str, phone: str,
        password_hash: str | None = None,
    ) -> Outcome[None]: ...
    async def delete_user(self, user_id: int) -> Outcome[None]: ...
