"""User Service — validation, hashing, and repository orchestration for user CRUD.

Invariants:
    - Every public method returns an ApiResponse; no exception escapes
    - Blank-field validation runs before any repository call
    - Update/Delete check existence first; a missing user never reaches the mutating call
    - Views never expose the password hash

Design Decisions:
    - The existence check and the mutation are separate store calls; a concurrent
      delete between them is reported by whatever the store returns
"""

import logging

from registration_api.core.errors import ErrorCategory
from registration_api.core.password_hasher import hash_password
from registration_api.core.repository_protocols import UserRepository
from registration_api.schemas.api_response import ApiResponse
from registration_api.schemas.user import (
    CreateUserRequest, UpdateUserRequest, UserView,
)

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required"
PROFILE_FIELDS_REQUIRED = "FullName, Email, and Phone are required"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _not_found(user_id: int) -> str:
    return f"User with ID {user_id} not found"


def _unexpected(e: Exception) -> str:
    return f"An error occurred: {e}"


class UserService:
    """Business operations on users. One repository, injected."""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def create_user(self, request: CreateUserRequest) -> ApiResponse[int]:
        try:
            if any(_is_blank(v) for v in (
                request.full_name, request.email, request.phone, request.password,
            )):
                return ApiResponse[int].error(
                    ALL_FIELDS_REQUIRED, ErrorCategory.VALIDATION,
                )

            outcome = await self._repository.create_user(
                request.full_name,
                request.email,
                request.phone,
                hash_password(request.password),
            )
            if not outcome.success or outcome.payload is None:
                return ApiResponse[int].error(
                    outcome.message,
                    outcome.category or ErrorCategory.BUSINESS_RULE,
                )
            return ApiResponse[int].ok(outcome.message, outcome.payload)
        except Exception as e:
            logger.error(
                f"Error creating user: {e}", exc_info=True,
                extra={"operation": "create_user"},
            )
            return ApiResponse[int].error(_unexpected(e), ErrorCategory.INTERNAL)

    async def get_all_users(self) -> ApiResponse[list[UserView]]:
        try:
            outcome = await self._repository.get_all_users()
            if not outcome.success or outcome.payload is None:
                return ApiResponse[list[UserView]].error(
                    outcome.message, outcome.category or ErrorCategory.DATABASE,
                )
            views = [UserView.from_user(u) for u in outcome.payload]
            return ApiResponse[list[UserView]].ok(outcome.message, views)
        except Exception as e:
            logger.error(
                f"Error getting all users: {e}", exc_info=True,
                extra={"operation": "get_all_users"},
            )
            return ApiResponse[list[UserView]].error(
                _unexpected(e), ErrorCategory.INTERNAL,
            )

    async def get_user_by_id(self, user_id: int) -> ApiResponse[UserView]:
        try:
            outcome = await self._repository.get_user_by_id(user_id)
            if not outcome.success or outcome.payload is None:
                return ApiResponse[UserView].error(
                    outcome.message,
                    outcome.category or ErrorCategory.RESOURCE_NOT_FOUND,
                )
            return ApiResponse[UserView].ok(
                outcome.message, UserView.from_user(outcome.payload),
            )
        except Exception as e:
            logger.error(
                f"Error getting user by ID {user_id}: {e}", exc_info=True,
                extra={"operation": "get_user_by_id", "user_id": user_id},
            )
            return ApiResponse[UserView].error(
                _unexpected(e), ErrorCategory.INTERNAL,
            )

    async def update_user(
        self, user_id: int, request: UpdateUserRequest,
    ) -> ApiResponse[None]:
        try:
            if any(_is_blank(v) for v in (
                request.full_name, request.email, request.phone,
            )):
                return ApiResponse[None].error(
                    PROFILE_FIELDS_REQUIRED, ErrorCategory.VALIDATION,
                )

            existing = await self._repository.get_user_by_id(user_id)
            if not existing.success:
                return ApiResponse[None].error(
                    _not_found(user_id), ErrorCategory.RESOURCE_NOT_FOUND,
                )

            password_hash = None
            if not _is_blank(request.password):
                password_hash = hash_password(request.password)

            outcome = await self._repository.update_user(
                user_id,
                request.full_name,
                request.email,
                request.phone,
                password_hash,
            )
            if not outcome.success:
                return ApiResponse[None].error(
                    outcome.message,
                    outcome.category or ErrorCategory.BUSINESS_RULE,
                )
            return ApiResponse[None].ok(outcome.message)
        except Exception as e:
            logger.error(
                f"Error updating user {user_id}: {e}", exc_info=True,
                extra={"operation": "update_user", "user_id": user_id},
            )
            return ApiResponse[None].error(_unexpected(e), ErrorCategory.INTERNAL)

    async def delete_user(self, user_id: int) -> ApiResponse[None]:
        try:
            existing = await self._repository.get_user_by_id(user_id)
            if not existing.success:
                return ApiResponse[None].error(
                    _not_found(user_id), ErrorCategory.RESOURCE_NOT_FOUND,
                )

            outcome = await self._repository.delete_user(user_id)
            if not outcome.success:
                return ApiResponse[None].error(
                    outcome.message,
                    outcome.category or ErrorCategory.BUSINESS_RULE,
                )
            return ApiResponse[None].ok(outcome.message)
        except Exception as e:
            logger.error(
                f"Error deleting user {user_id}: {e}", exc_info=True,
                extra={"operation": "delete_user", "user_id": user_id},
            )
            return ApiResponse[None].error(_unexpected(e), ErrorCategory.INTERNAL)
