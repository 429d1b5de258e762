"""Users table and the JSON-returning user functions.

Every function returns json_build_object('success', bool, 'message', text, 'data', ...).
User data is {id, fullName, email, phone, createdAt}; the password hash is never returned.

Revision ID: 001_users
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_users"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


USER_JSON = """json_build_object(
        'id', u.id,
        'fullName', u.full_name,
        'email', u.email,
        'phone', u.phone,
        'createdAt', u.created_at
    )"""

CREATE_USER = """
CREATE OR REPLACE FUNCTION create_user(
    p_full_name VARCHAR, p_email VARCHAR, p_phone VARCHAR, p_password_hash VARCHAR
) RETURNS JSON AS $$
DECLARE
    v_id INTEGER;
BEGIN
    IF EXISTS (SELECT 1 FROM users WHERE email = p_email) THEN
        RETURN json_build_object(
            'success', false, 'message', 'Email already exists', 'data', NULL
        );
    END IF;

    INSERT INTO users (full_name, email, phone, password_hash)
    VALUES (p_full_name, p_email, p_phone, p_password_hash)
    RETURNING id INTO v_id;

    RETURN json_build_object(
        'success', true,
        'message', 'User created successfully',
        'data', json_build_object('id', v_id)
    );
EXCEPTION
    WHEN unique_violation THEN
        RETURN json_build_object(
            'success', false, 'message', 'Email already exists', 'data', NULL
        );
END;
$$ LANGUAGE plpgsql;
"""

GET_ALL_USERS = f"""
CREATE OR REPLACE FUNCTION get_all_users() RETURNS JSON AS $$
BEGIN
    RETURN json_build_object(
        'success', true,
        'message', 'Users retrieved successfully',
        'data', (
            SELECT COALESCE(json_agg({USER_JSON} ORDER BY u.id), '[]'::json)
            FROM users u
        )
    );
END;
$$ LANGUAGE plpgsql;
"""

GET_USER_BY_ID = f"""
CREATE OR REPLACE FUNCTION get_user_by_id(p_id INTEGER) RETURNS JSON AS $$
DECLARE
    v_user JSON;
BEGIN
    SELECT {USER_JSON} INTO v_user FROM users u WHERE u.id = p_id;

    IF v_user IS NULL THEN
        RETURN json_build_object(
            'success', false, 'message', 'User not found', 'data', NULL
        );
    END IF;

    RETURN json_build_object(
        'success', true, 'message', 'User retrieved successfully', 'data', v_user
    );
END;
$$ LANGUAGE plpgsql;
"""

UPDATE_USER = """
CREATE OR REPLACE FUNCTION update_user(
    p_id INTEGER, p_full_name VARCHAR, p_email VARCHAR, p_phone VARCHAR,
    p_password_hash VARCHAR
) RETURNS JSON AS $$
BEGIN
    IF NOT EXISTS (SELECT 1 FROM users WHERE id = p_id) THEN
        RETURN json_build_object(
            'success', false, 'message', 'User not found', 'data', NULL
        );
    END IF;

    IF EXISTS (SELECT 1 FROM users WHERE email = p_email AND id <> p_id) THEN
        RETURN json_build_object(
            'success', false, 'message', 'Email already exists', 'data', NULL
        );
    END IF;

    UPDATE users
    SET full_name = p_full_name,
        email = p_email,
        phone = p_phone,
        password_hash = COALESCE(p_password_hash, password_hash)
    WHERE id = p_id;

    RETURN json_build_object(
        'success', true, 'message', 'User updated successfully', 'data', NULL
    );
EXCEPTION
    WHEN unique_violation THEN
        RETURN json_build_object(
            'success', false, 'message', 'Email already exists', 'data', NULL
        );
END;
$$ LANGUAGE plpgsql;
"""

DELETE_USER = """
CREATE OR REPLACE FUNCTION delete_user(p_id INTEGER) RETURNS JSON AS $$
BEGIN
    DELETE FROM users WHERE id = p_id;

    IF NOT FOUND THEN
        RETURN json_build_object(
            'success', false, 'message', 'User not found', 'data', NULL
        );
    END IF;

    RETURN json_build_object(
        'success', true, 'message', 'User deleted successfully', 'data', NULL
    );
END;
$$ LANGUAGE plpgsql;
"""


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False, unique=True),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("password_hash", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    for ddl in (CREATE_USER, GET_ALL_USERS, GET_USER_BY_ID, UPDATE_USER, DELETE_USER):
        op.execute(ddl)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS delete_user(INTEGER)")
    op.execute(
        "DROP FUNCTION IF EXISTS update_user(INTEGER, VARCHAR, VARCHAR, VARCHAR, VARCHAR)",
    )
    op.execute("DROP FUNCTION IF EXISTS get_user_by_id(INTEGER)")
    op.execute("DROP FUNCTION IF EXISTS get_all_users()")
    op.execute("DROP FUNCTION IF EXISTS create_user(VARCHAR, VARCHAR, VARCHAR, VARCHAR)")
    op.drop_table("users")
