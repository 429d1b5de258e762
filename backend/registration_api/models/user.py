"""User ORM — the users table behind the create/get/update/delete user functions.

Invariants:
    - id is a store-assigned serial primary key
    - email is unique; password_hash is exactly the 64-char SHA-256 hex digest
    - created_at is set once by the server default and never updated
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from registration_api.db.base import Base


class UserRecord(Base):
    """Persisted user row."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
