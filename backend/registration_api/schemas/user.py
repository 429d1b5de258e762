"""User Schemas — request/response contracts for the /api/users endpoints.

Invariants:
    - JSON keys are camelCase (fullName, createdAt); attributes are snake_case
    - Requests accept either spelling (populate_by_name)
    - UserView never carries the password hash
    - Whitespace is not stripped here; blank-field rules live in UserService
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from registration_api.core.domain_types import User

EMAIL_MAX_LENGTH = 100
PHONE_PATTERN = r"^\+?[\d(][\d ().-]*\d$"


class CamelModel(BaseModel):
    """Base model with camelCase wire names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserFields(CamelModel):
    """Fields shared by create and update requests."""
    full_name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(max_length=20, pattern=PHONE_PATTERN)

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(
                f"email must be at most {EMAIL_MAX_LENGTH} characters",
            )
        return v


class CreateUserRequest(UserFields):
    """Registration payload. Password is plain text; hashed by the service."""
    password: str = Field(min_length=6, max_length=100)


class UpdateUserRequest(UserFields):
    """Update payload. Omitting password keeps the stored hash."""
    password: str | None = Field(None, min_length=6, max_length=100)


class UserView(CamelModel):
    """Client-facing projection of a User."""
    id: int
    full_name: str
    email: str
    phone: str
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            created_at=user.created_at,
        )
