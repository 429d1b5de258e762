"""ORM Models — table definitions used for Alembic metadata.

Runtime reads and writes go through the stored functions, not the ORM.
"""

from registration_api.models.user import UserRecord  # noqa: F401
