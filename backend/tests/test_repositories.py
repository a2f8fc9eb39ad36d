# 저장소 단위 테스트 (MongoDB 없이 Beanie Document를 mock으로 대체)
# - 잘못된 ObjectId는 조회하지 않고 None
# - DuplicateKeyError -> ConflictError 변환
# - 목록 조회의 find/sort/skip/limit/count 체인, updated_at 갱신, 일괄 삭제 건수

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from beanie import PydanticObjectId
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from todo_api.core.exceptions import ConflictError
from todo_api.main import create_app
from todo_api.repositories.todo_repository import TodoRepository
from todo_api.repositories.user_repository import UserRepository

from conftest import InMemoryUserRepository, auth_headers, make_settings

TODO_MODEL = "todo_api.repositories.todo_repository.Todo"
USER_MODEL = "todo_api.repositories.user_repository.User"


def _find_chain(mock_todo, items, total):
    query = MagicMock()
    query.count = AsyncMock(return_value=total)
    query.sort.return_value.skip.return_value.limit.return_value.to_list = AsyncMock(return_value=items)
    mock_todo.find.return_value = query
    return query


@patch(TODO_MODEL)
def test_todo_get_malformed_id_skips_lookup(mock_todo):
    mock_todo.get = AsyncMock()

    assert asyncio.run(TodoRepository().get("not-an-id")) is None
    mock_todo.get.assert_not_called()


@patch(TODO_MODEL)
def test_todo_get_valid_id(mock_todo):
    todo_id = str(ObjectId())
    mock_todo.get = AsyncMock(return_value="doc")

    assert asyncio.run(TodoRepository().get(todo_id)) == "doc"
    mock_todo.get.assert_awaited_once_with(PydanticObjectId(todo_id))


@patch(TODO_MODEL)
def test_list_for_owner_builds_query_and_paging(mock_todo):
    query = _find_chain(mock_todo, ["t1", "t2"], 12)

    items, total = asyncio.run(TodoRepository().list_for_owner("u1", completed=True, skip=20, limit=10))

    assert (items, total) == (["t1", "t2"], 12)
    mock_todo.find.assert_called_with({"owner_id": "u1", "completed": True})
    query.sort.assert_called_once_with("-created_at")
    query.sort.return_value.skip.assert_called_once_with(20)
    query.sort.return_value.skip.return_value.limit.assert_called_once_with(10)


@patch(TODO_MODEL)
def test_list_for_owner_without_filter_omits_completed(mock_todo):
    _find_chain(mock_todo, [], 0)

    asyncio.run(TodoRepository().list_for_owner("u1"))

    mock_todo.find.assert_called_with({"owner_id": "u1"})


@patch(TODO_MODEL)
def test_todo_create_inserts(mock_todo):
    mock_todo.return_value.insert = AsyncMock(return_value="saved")

    assert asyncio.run(TodoRepository().create("u1", "Write report")) == "saved"
    mock_todo.assert_called_once_with(owner_id="u1", title="Write report", description=None, due_date=None)


def test_todo_update_stamps_updated_at():
    todo = MagicMock()
    todo.set = AsyncMock()

    asyncio.run(TodoRepository().update(todo, {"title": "New"}))

    changes = todo.set.await_args.args[0]
    assert changes["title"] == "New"
    assert "updated_at" in changes


def test_todo_update_without_changes_does_not_write():
    todo = MagicMock()
    todo.set = AsyncMock()

    assert asyncio.run(TodoRepository().update(todo, {})) is todo
    todo.set.assert_not_awaited()


@patch(TODO_MODEL)
def test_delete_for_owner_returns_deleted_count(mock_todo):
    mock_todo.find.return_value.delete = AsyncMock(return_value=MagicMock(deleted_count=2))

    assert asyncio.run(TodoRepository().delete_for_owner("u1")) == 2
    mock_todo.find.assert_called_once_with({"owner_id": "u1"})


@patch(TODO_MODEL)
def test_delete_for_owner_without_result_is_zero(mock_todo):
    mock_todo.find.return_value.delete = AsyncMock(return_value=None)

    assert asyncio.run(TodoRepository().delete_for_owner("u1")) == 0


@patch(USER_MODEL)
def test_user_get_malformed_id_skips_lookup(mock_user):
    mock_user.get = AsyncMock()

    assert asyncio.run(UserRepository().get("12345")) is None
    mock_user.get.assert_not_called()


@patch(USER_MODEL)
def test_user_get_by_email(mock_user):
    mock_user.find_one = AsyncMock(return_value="user")

    assert asyncio.run(UserRepository().get_by_email("a@example.com")) == "user"
    mock_user.find_one.assert_awaited_once_with({"email": "a@example.com"})


@patch(USER_MODEL)
def test_user_create_duplicate_email_conflicts(mock_user):
    mock_user.return_value.insert = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))

    with pytest.raises(ConflictError) as exc:
        asyncio.run(UserRepository().create("a@example.com", "hash"))
    assert exc.value.message == "Email already registered"


def test_user_update_duplicate_email_conflicts():
    user = MagicMock()
    user.set = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))

    with pytest.raises(ConflictError):
        asyncio.run(UserRepository().update(user, {"email": "taken@example.com"}))


def test_user_update_without_changes_does_not_write():
    user = MagicMock()
    user.set = AsyncMock()

    asyncio.run(UserRepository().update(user, {}))
    user.set.assert_not_awaited()


@patch(TODO_MODEL)
def test_malformed_todo_id_is_not_found_over_http(mock_todo):
    mock_todo.get = AsyncMock()
    app = create_app(make_settings())
    users = InMemoryUserRepository()
    app.dependency_overrides[UserRepository] = lambda: users
    # TodoRepository는 실제 구현을 그대로 사용
    client = TestClient(app)
    headers = auth_headers(client, "alice@example.com")

    res = client.get("/api/todos/not-an-objectid", headers=headers)

    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Todo not found"}
    mock_todo.get.assert_not_called()
