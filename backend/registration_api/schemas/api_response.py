"""Response Envelope — the {success, message, data} wrapper returned by every endpoint.

Invariants:
    - success=False implies data is None (enforced on construction)
    - category is internal: set on errors for HTTP status mapping, never serialized
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, PrivateAttr, model_validator

from registration_api.core.errors import ErrorCategory

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform result envelope."""
    success: bool
    message: str = ""
    data: T | None = None

    _category: ErrorCategory | None = PrivateAttr(default=None)

    @model_validator(mode="after")
    def check_error_has_no_data(self):
        if not self.success and self.data is not None:
            raise ValueError("error responses cannot carry data")
        return self

    @property
    def category(self) -> ErrorCategory | None:
        return self._category

    @classmethod
    def ok(cls, message: str, data: T | None = None) -> "ApiResponse[T]":
        """Success envelope; data defaults to None."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(
        cls, message: str, category: ErrorCategory = ErrorCategory.BUSINESS_RULE,
    ) -> "ApiResponse[T]":
        """Error envelope; data is always None."""
        response = cls(success=False, message=message)
        response._category = category
        return response
