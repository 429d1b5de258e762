"""Dependency wiring — builds the service graph per request.

Usage in route functions:
    service: UserService = Depends(get_user_service)

Tests override get_user_service (or get_db_manager) via app.dependency_overrides.
"""

from fastapi import Depends

from registration_api.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from registration_api.infrastructure.user_repository import PostgresUserRepository
from registration_api.services.user_service import UserService


def get_user_service(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> UserService:
    return UserService(PostgresUserRepository(db))
