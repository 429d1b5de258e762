"""User Routes — CRUD endpoints mapping service envelopes to HTTP status.

Invariants:
    - Routes contain no business logic; every call delegates to UserService
    - Every body is an ApiResponse envelope, success or failure
    - POST success is 201 with a Location header pointing at GET /api/users/{id}
    - Failure status comes from the envelope's category (see _STATUS_BY_CATEGORY)
    - Path ids outside 1..MAX_USER_ID are rejected as validation errors (400)
"""

import logging

from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse

from registration_api.api.deps import get_user_service
from registration_api.core.errors import ErrorCategory
from registration_api.schemas.api_response import ApiResponse
from registration_api.schemas.user import (
    CreateUserRequest, UpdateUserRequest, UserView,
)
from registration_api.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])

# users.id is a PostgreSQL serial (int4)
MAX_USER_ID = 2**31 - 1

_STATUS_BY_CATEGORY = {
    ErrorCategory.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.BUSINESS_RULE: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCategory.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_status(response: ApiResponse) -> int:
    return _STATUS_BY_CATEGORY.get(
        response.category, status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _envelope(
    response: ApiResponse, status_code: int, headers: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def _respond(response: ApiResponse) -> JSONResponse:
    if not response.success:
        return _envelope(response, _error_status(response))
    return _envelope(response, status.HTTP_200_OK)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[int],
    responses={
        400: {"model": ApiResponse[int]},
        500: {"model": ApiResponse[int]},
    },
)
async def create_user(
    body: CreateUserRequest,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    """Register a new user. Returns the new id."""
    response = await service.create_user(body)
    if not response.success:
        return _envelope(response, _error_status(response))
    location = request.url_for("get_user_by_id", user_id=str(response.data))
    return _envelope(
        response, status.HTTP_201_CREATED, headers={"Location": str(location)},
    )


@router.get(
    "",
    response_model=ApiResponse[list[UserView]],
    responses={500: {"model": ApiResponse[list[UserView]]}},
)
async def get_all_users(service: UserService = Depends(get_user_service)):
    """List all users in store order."""
    response = await service.get_all_users()
    if not response.success:
        return _envelope(response, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _envelope(response, status.HTTP_200_OK)


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserView],
    responses={
        404: {"model": ApiResponse[UserView]},
        500: {"model": ApiResponse[UserView]},
    },
)
async def get_user_by_id(
    user_id: int = Path(ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    """Fetch one user."""
    return _respond(await service.get_user_by_id(user_id))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[None],
    responses={
        400: {"model": ApiResponse[None]},
        404: {"model": ApiResponse[None]},
        500: {"model": ApiResponse[None]},
    },
)
async def update_user(
    body: UpdateUserRequest,
    user_id: int = Path(ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    """Update name, email, and phone; password only when supplied."""
    return _respond(await service.update_user(user_id, body))


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[None],
    responses={
        404: {"model": ApiResponse[None]},
        500: {"model": ApiResponse[None]},
    },
)
async def delete_user(
    user_id: int = Path(ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    """Permanently delete a user."""
    return _respond(await service.delete_user(user_id))
