"""Store Result Decoding — pure translation of stored-function JSON into domain values.

Every user function in the database returns a single JSON value shaped
{"success": bool, "message": str, "data": object | array | null}. This module
turns that value into a StoreResult and the data into User entities. No IO.

Invariants:
    - None (SQL NULL) or JSON null at the top level decodes to None
    - A missing "data" key is treated exactly like "data": null
    - A null message decodes to "Unknown error"
    - Malformed documents raise ValueError/KeyError/TypeError; callers own the handling
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter

from registration_api.core.domain_types import User, UserId

UNKNOWN_ERROR = "Unknown error"

_datetime_adapter = TypeAdapter(datetime)


@dataclass(frozen=True)
class StoreResult:
    """Decoded top-level store reply."""
    success: bool
    message: str
    data: Any = None


def parse_store_result(raw: Any) -> StoreResult | None:
    """Decode a raw scalar returned by a stored function.

    Accepts JSON text, UTF-8 bytes, or a mapping already decoded by the driver.
    """
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    doc = json.loads(raw) if isinstance(raw, str) else raw
    if doc is None:
        return None
    if not isinstance(doc, Mapping):
        raise TypeError(
            f"Store result must be a JSON object, got {type(doc).__name__}",
        )

    success = doc.get("success")
    if not isinstance(success, bool):
        raise ValueError("Store result has no boolean 'success' field")
    message = doc.get("message")
    return StoreResult(
        success=success,
        message=UNKNOWN_ERROR if message is None else str(message),
        data=doc.get("data"),
    )


def parse_user(data: Mapping[str, Any]) -> User:
    """Build a User from one store record ({id, fullName, email, phone, createdAt})."""
    created_at = data.get("createdAt")
    return User(
        id=UserId(int(data["id"])),
        full_name=data.get("fullName") or "",
        email=data.get("email") or "",
        phone=data.get("phone") or "",
        created_at=(
            _datetime_adapter.validate_python(created_at)
            if created_at is not None else None
        ),
        password_hash=data.get("passwordHash") or "",
    )


def parse_users(data: Any) -> list[User]:
    """Build a list of Users, preserving store order. Null data is an empty list."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise TypeError(
            f"Expected a JSON array of users, got {type(data).__name__}",
        )
    return [parse_user(item) for item in data]


def parse_created_id(data: Any) -> UserId | None:
    """Extract the new user id from create_user data ({"id": int}); None if absent."""
    if data is None:
        return None
    return UserId(int(data["id"]))
