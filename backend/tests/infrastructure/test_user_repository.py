"""User Repository — outcome contract for every store reply shape.

Tests cover:
    - SQL NULL replies → "Failed to <op>: No result returned from database"
    - Raised exceptions → "An error occurred while <op-ing>: <text>", never propagated
    - Store failures keep the store message; get_user_by_id null data → "User not found"
    - update/delete store "not found" refusals are RESOURCE_NOT_FOUND
    - get_all_users null data → empty list
    - A real driver error (SQLite has no create_user) becomes a failed outcome
"""

import json

import pytest

from registration_api.core.errors import ErrorCategory
from registration_api.infrastructure.database import DatabaseSessionManager
from registration_api.infrastructure.user_repository import PostgresUserRepository
from tests.services.fake_store import FakeSessionManager, FakeUserStore


@pytest.fixture
def store():
    return FakeUserStore()


@pytest.fixture
def repository(store):
    return PostgresUserRepository(FakeSessionManager(store))


def _reply(success, message, data=None):
    return json.dumps({"success": success, "message": message, "data": data})


OPERATIONS = [
    ("create_user", lambda r: r.create_user("Jane", "j@example.com", "123", "a" * 64),
     "create user", "creating the user"),
    ("get_all_users", lambda r: r.get_all_users(), "get users", "retrieving users"),
    ("get_user_by_id", lambda r: r.get_user_by_id(1), "get user", "retrieving the user"),
    ("update_user", lambda r: r.update_user(1, "Jane", "j@example.com", "123"),
     "update user", "updating the user"),
    ("delete_user", lambda r: r.delete_user(1), "delete user", "deleting the user"),
]


@pytest.mark.parametrize("function, call, op, _", OPERATIONS)
async def test_null_reply_is_no_result_failure(store, repository, function, call, op, _):
    store.overrides[function] = None
    outcome = await call(repository)
    assert outcome.success is False
    assert outcome.message == f"Failed to {op}: No result returned from database"
    assert outcome.payload is None
    assert outcome.category == ErrorCategory.DATABASE


@pytest.mark.parametrize("function, call, _, op_ing", OPERATIONS)
async def test_exception_becomes_failure(store, repository, function, call, _, op_ing):
    store.overrides[function] = ConnectionResetError("server closed the connection")
    outcome = await call(repository)
    assert outcome.success is False
    assert outcome.message == (
        f"An error occurred while {op_ing}: server closed the connection"
    )
    assert outcome.category == ErrorCategory.DATABASE


@pytest.mark.parametrize("function, call, _, op_ing", OPERATIONS)
async def test_malformed_reply_becomes_failure(store, repository, function, call, _, op_ing):
    store.overrides[function] = "{not json"
    outcome = await call(repository)
    assert outcome.success is False
    assert outcome.message.startswith(f"An error occurred while {op_ing}: ")


async def test_create_returns_new_id(repository):
    outcome = await repository.create_user("Jane", "j@example.com", "123", "a" * 64)
    assert outcome.success is True
    assert outcome.payload == 1
    assert outcome.message == "User created successfully"


async def test_create_store_failure_keeps_message(store, repository):
    store.overrides["create_user"] = _reply(False, "Email already exists")
    outcome = await repository.create_user("Jane", "j@example.com", "123", "a" * 64)
    assert outcome.success is False
    assert outcome.message == "Email already exists"
    assert outcome.category == ErrorCategory.BUSINESS_RULE


async def test_create_success_with_null_data_has_no_id(store, repository):
    store.overrides["create_user"] = _reply(True, "User created successfully")
    outcome = await repository.create_user("Jane", "j@example.com", "123", "a" * 64)
    assert outcome.success is True
    assert outcome.payload is None


async def test_get_all_null_data_is_empty_list(store, repository):
    store.overrides["get_all_users"] = _reply(True, "Users retrieved successfully", None)
    outcome = await repository.get_all_users()
    assert outcome.success is True
    assert outcome.payload == []


async def test_get_all_missing_message_is_unknown_error(store, repository):
    store.overrides["get_all_users"] = json.dumps({"success": False, "message": None})
    outcome = await repository.get_all_users()
    assert outcome.success is False
    assert outcome.message == "Unknown error"


async def test_get_by_id_null_data_is_not_found(store, repository):
    store.overrides["get_user_by_id"] = _reply(True, "User retrieved successfully", None)
    outcome = await repository.get_user_by_id(9)
    assert outcome.success is False
    assert outcome.message == "User not found"
    assert outcome.category == ErrorCategory.RESOURCE_NOT_FOUND


async def test_get_by_id_store_failure_is_not_found(repository):
    outcome = await repository.get_user_by_id(9)
    assert outcome.success is False
    assert outcome.message == "User not found"
    assert outcome.category == ErrorCategory.RESOURCE_NOT_FOUND


async def test_get_by_id_decodes_user(repository):
    await repository.create_user("Jane Doe", "jane@example.com", "+15551234567", "b" * 64)
    outcome = await repository.get_user_by_id(1)
    assert outcome.success is True
    assert outcome.payload.full_name == "Jane Doe"
    assert outcome.payload.created_at is not None


async def test_update_passes_null_hash_through(store, repository):
    await repository.create_user("Jane Doe", "jane@example.com", "+1555", "b" * 64)
    outcome = await repository.update_user(1, "Jane A. Doe", "jane@example.com", "+1555")
    assert outcome.success is True
    assert outcome.payload is None
    assert store.rows[1]["password_hash"] == "b" * 64


async def test_delete_store_not_found_is_resource_not_found(repository):
    outcome = await repository.delete_user(404)
    assert outcome.success is False
    assert outcome.message == "User not found"
    assert outcome.category == ErrorCategory.RESOURCE_NOT_FOUND


async def test_update_store_not_found_is_resource_not_found(repository):
    outcome = await repository.update_user(404, "Jane", "j@example.com", "123")
    assert outcome.success is False
    assert outcome.message == "User not found"
    assert outcome.category == ErrorCategory.RESOURCE_NOT_FOUND


async def test_update_email_conflict_stays_business_rule(store, repository):
    store.overrides["update_user"] = _reply(False, "Email already exists")
    outcome = await repository.update_user(1, "Jane", "j@example.com", "123")
    assert outcome.message == "Email already exists"
    assert outcome.category == ErrorCategory.BUSINESS_RULE


async def test_delete_other_refusal_is_business_rule(store, repository):
    store.overrides["delete_user"] = _reply(False, "User is locked")
    outcome = await repository.delete_user(1)
    assert outcome.message == "User is locked"
    assert outcome.category == ErrorCategory.BUSINESS_RULE


async def test_real_driver_error_is_contained(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}")
    try:
        outcome = await PostgresUserRepository(manager).create_user(
            "Jane", "j@example.com", "123", "a" * 64,
        )
    finally:
        await manager.dispose()
    assert outcome.success is False
    assert outcome.message.startswith("An error occurred while creating the user: ")
    assert "create_user" in outcome.message
