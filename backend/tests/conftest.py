# 공용 픽스처
# - 저장소를 대신하는 인메모리 구현 (MongoDB 불필요)
# - 테스트용 Settings로 만든 앱, 회원가입/로그인 헬퍼

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-bytes")

import itertools
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from todo_api.core.config import Settings
from todo_api.core.exceptions import ConflictError
from todo_api.main import create_app
from todo_api.models.user import utcnow
from todo_api.repositories.todo_repository import TodoRepository
from todo_api.repositories.user_repository import UserRepository

TEST_SECRET = "test-secret-key-that-is-at-least-32-bytes"

_seq = itertools.count()


def _new_id() -> str:
    return str(ObjectId())


@dataclass
class FakeUser:
    email: str
    hashed_password: str
    name: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class FakeTodo:
    owner_id: str
    title: str
    description: Optional[str] = None
    completed: bool = False
    due_date: Optional[datetime] = None
    id: str = field(default_factory=_new_id)
    # "최신순" 정렬이 항상 같도록 단조 증가
    created_at: datetime = field(default_factory=lambda: utcnow() + timedelta(milliseconds=next(_seq)))
    updated_at: datetime = field(default_factory=utcnow)


class InMemoryUserRepository:
    def __init__(self):
        self.users = {}

    async def get(self, user_id):
        return self.users.get(user_id)

    async def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, email, hashed_password, name=None):
        if await self.get_by_email(email):
            raise ConflictError("Email already registered")
        user = FakeUser(email=email, hashed_password=hashed_password, name=name)
        self.users[user.id] = user
        return user

    async def update(self, user, changes):
        for key, value in changes.items():
            setattr(user, key, value)
        return user

    async def delete(self, user):
        self.users.pop(user.id, None)


class InMemoryTodoRepository:
    def __init__(self):
        self.todos = {}

    async def get(self, todo_id):
        return self.todos.get(todo_id)

    async def list_for_owner(self, owner_id, completed=None, skip=0, limit=20):
        matches = [
            t for t in self.todos.values()
            if t.owner_id == owner_id and (completed is None or t.completed == completed)
        ]
        matches.sort(key=lambda t: t.created_at, reverse=True)
        return matches[skip:skip + limit], len(matches)

    async def create(self, owner_id, title, description=None, due_date=None):
        todo = FakeTodo(owner_id=owner_id, title=title, description=description, due_date=due_date)
        self.todos[todo.id] = todo
        return todo

    async def update(self, todo, changes):
        for key, value in changes.items():
            setattr(todo, key, value)
        todo.updated_at = utcnow()
        return todo

    async def delete(self, todo):
        self.todos.pop(todo.id, None)

    async def delete_for_owner(self, owner_id):
        doomed = [t.id for t in self.todos.values() if t.owner_id == owner_id]
        for todo_id in doomed:
            del self.todos[todo_id]
        return len(doomed)


def make_settings(**overrides) -> Settings:
    values = dict(JWT_SECRET_KEY=TEST_SECRET, BCRYPT_ROUNDS=10, MONGODB_URI="mongodb://unused:27017/test")
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def todo_repo():
    return InMemoryTodoRepository()


@pytest.fixture
def app(settings, user_repo, todo_repo):
    application = create_app(settings)
    application.dependency_overrides[UserRepository] = lambda: user_repo
    application.dependency_overrides[TodoRepository] = lambda: todo_repo
    return application


@pytest.fixture
def client(app):
    # 컨텍스트 매니저로 쓰지 않으므로 MongoDB 시작 훅이 실행되지 않음
    return TestClient(app)


@pytest.fixture
def tokens(app):
    return app.state.token_service


def register(client, email, password="secret1", name=None):
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    return client.post("/api/auth/register", json=body)


def login(client, email, password="secret1"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def auth_headers(client, email, password="secret1"):
    """(필요하면) 가입 후 로그인해서 Authorization 헤더 dict를 돌려줍니다."""
    register(client, email, password)
    token = login(client, email, password).json()["data"]["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    return auth_headers(client, "alice@example.com")


@pytest.fixture
def bob(client):
    return auth_headers(client, "bob@example.com")
