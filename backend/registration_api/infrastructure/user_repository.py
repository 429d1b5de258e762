"""User Repository — PostgreSQL stored-function access for user records.

Each operation opens its own session, issues exactly one
`SELECT <function>(...)` with bound parameters, and decodes the JSON reply via
core/store_result.py.

Invariants:
    - Never raises: every exception becomes a failed Outcome with the exception text
    - SQL NULL reply → "Failed to <op>: No result returned from database"
    - Store-reported failures keep the store's message verbatim
    - get_user_by_id: null data → "User not found"; get_all_users: null data → []
    - update/delete: a store "not found" refusal is RESOURCE_NOT_FOUND; other
      refusals are BUSINESS_RULE
"""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from registration_api.core.domain_types import Outcome, User, UserId
from registration_api.core.errors import ErrorCategory
from registration_api.core.store_result import (
    StoreResult, parse_created_id, parse_store_result, parse_user, parse_users,
)
from registration_api.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

NO_RESULT = "No result returned from database"

CREATE_USER_SQL = text(
    "SELECT create_user(:full_name, :email, :phone, :password_hash)",
)
GET_ALL_USERS_SQL = text("SELECT get_all_users()")
GET_USER_BY_ID_SQL = text("SELECT get_user_by_id(:user_id)")
UPDATE_USER_SQL = text(
    "SELECT update_user(:user_id, :full_name, :email, :phone, :password_hash)",
)
DELETE_USER_SQL = text("SELECT delete_user(:user_id)")


def _refusal(result: StoreResult) -> Outcome[None]:
    if "not found" in result.message.lower():
        return Outcome.fail(result.message, ErrorCategory.RESOURCE_NOT_FOUND)
    return Outcome.fail(result.message)


class PostgresUserRepository:
    """UserRepository backed by the create/get/update/delete user functions."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def _call(
        self, statement: TextClause, params: dict[str, Any] | None = None,
    ) -> StoreResult | None:
        async with self._db.session() as session:
            result = await session.execute(statement, params or {})
            raw = result.scalar()
            await session.commit()
        return parse_store_result(raw)

    async def create_user(
        self, full_name: str, email: str, phone: str, password_hash: str,
    ) -> Outcome[UserId]:
        try:
            result = await self._call(CREATE_USER_SQL, {
                "full_name": full_name,
                "email": email,
                "phone": phone,
                "password_hash": password_hash,
            })
            if result is None:
                return Outcome.fail(
                    f"Failed to create user: {NO_RESULT}", ErrorCategory.DATABASE,
                )
            if not result.success:
                return Outcome.fail(result.message)
            return Outcome.ok(result.message, parse_created_id(result.data))
        except Exception as e:
            logger.error(
                f"Error creating user: {e}", exc_info=True,
                extra={"operation": "create_user"},
            )
            return Outcome.fail(
                f"An error occurred while creating the user: {e}",
                ErrorCategory.DATABASE,
            )

    async def get_all_users(self) -> Outcome[list[User]]:
        try:
            result = await self._call(GET_ALL_USERS_SQL)
            if result is None:
                return Outcome.fail(
                    f"Failed to get users: {NO_RESULT}", ErrorCategory.DATABASE,
                )
            if not result.success:
                return Outcome.fail(result.message)
            return Outcome.ok(result.message, parse_users(result.data))
        except Exception as e:
            logger.error(
                f"Error getting all users: {e}", exc_info=True,
                extra={"operation": "get_all_users"},
            )
            return Outcome.fail(
                f"An error occurred while retrieving users: {e}",
                ErrorCategory.DATABASE,
            )

    async def get_user_by_id(self, user_id: int) -> Outcome[User]:
        try:
            result = await self._call(GET_USER_BY_ID_SQL, {"user_id": user_id})
            if result is None:
                return Outcome.fail(
                    f"Failed to get user: {NO_RESULT}", ErrorCategory.DATABASE,
                )
            if not result.success:
                return Outcome.fail(
                    result.message, ErrorCategory.RESOURCE_NOT_FOUND,
                )
            if result.data is None:
                return Outcome.fail(
                    "User not found", ErrorCategory.RESOURCE_NOT_FOUND,
                )
            return Outcome.ok(result.message, parse_user(result.data))
        except Exception as e:
            logger.error(
                f"Error getting user by ID {user_id}: {e}", exc_info=True,
                extra={"operation": "get_user_by_id", "user_id": user_id},
            )
            return Outcome.fail(
                f"An error occurred while retrieving the user: {e}",
                ErrorCategory.DATABASE,
            )

    async def update_user(
        self, user_id: int, full_name: str, email: str, phone: str,
        password_hash: str | None = None,
    ) -> Outcome[None]:
        try:
            # NULL password_hash keeps the stored hash
            result = await self._call(UPDATE_USER_SQL, {
                "user_id": user_id,
                "full_name": full_name,
                "email": email,
                "phone": phone,
                "password_hash": password_hash,
            })
            if result is None:
                return Outcome.fail(
                    f"Failed to update user: {NO_RESULT}", ErrorCategory.DATABASE,
                )
            if not result.success:
                return _refusal(result)
            return Outcome.ok(result.message)
        except Exception as e:
            logger.error(
                f"Error updating user {user_id}: {e}", exc_info=True,
                extra={"operation": "update_user", "user_id": user_id},
            )
            return Outcome.fail(
                f"An error occurred while updating the user: {e}",
                ErrorCategory.DATABASE,
            )

    async def delete_user(self, user_id: int) -> Outcome[None]:
        try:
            result = await self._call(DELETE_USER_SQL, {"user_id": user_id})
            if result is None:
                return Outcome.fail(
                    f"Failed to delete user: {NO_RESULT}", ErrorCategory.DATABASE,
                )
            if not result.success:
                return _refusal(result)
            return Outcome.ok(result.message)
        except Exception as e:
            logger.error(
                f"Error deleting user {user_id}: {e}", exc_info=True,
                extra={"operation": "delete_user", "user_id": user_id},
            )
            return Outcome.fail(
                f"An error occurred while deleting the user: {e}",
                ErrorCategory.DATABASE,
            )
