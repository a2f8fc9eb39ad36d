# 사용자 서비스 레이어
# - 계정 조회/수정/삭제 (본인 id에 대해서만 가능)
# - 계정 삭제 시 해당 사용자의 할 일도 함께 삭제 (MongoDB에는 FK cascade가 없음)

import logging
from typing import Any, Dict

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool

from ..core.exceptions import ConflictError
from ..core.security import PasswordHasher, TokenClaims, get_password_hasher
from ..models.user import User
from ..repositories.todo_repository import TodoRepository
from ..repositories.user_repository import UserRepository
from .ownership import authorize_owner

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository, todos: TodoRepository, hasher: PasswordHasher):
        self.users = users
        self.todos = todos
        self.hasher = hasher

    async def get(self, claims: TokenClaims, user_id: str) -> User:
        user = await self.users.get(user_id)
        return authorize_owner(user, claims, "User", user_id, owner_attr="id")

    async def update(self, claims: TokenClaims, user_id: str, changes: Dict[str, Any]) -> User:
        user = await self.get(claims, user_id)

        updates: Dict[str, Any] = {}
        if "email" in changes and changes["email"] != user.email:
            other = await self.users.get_by_email(changes["email"])
            if other and str(other.id) != str(user.id):
                raise ConflictError("Email already registered")
            updates["email"] = changes["email"]
        if "name" in changes:
            updates["name"] = changes["name"]
        if "password" in changes:
            updates["hashed_password"] = await run_in_threadpool(self.hasher.hash, changes["password"])

        return await self.users.update(user, updates)

    async def delete(self, claims: TokenClaims, user_id: str) -> None:
        user = await self.get(claims, user_id)
        # 계정을 먼저 지웁니다. 여기서 실패하면 할 일은 그대로 남습니다.
        await self.users.delete(user)
        removed = await self.todos.delete_for_owner(str(user.id))
        logger.info(f"[users] deleted user {user_id} and {removed} todos")


def get_user_service(
    users: UserRepository = Depends(UserRepository),
    todos: TodoRepository = Depends(TodoRepository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(users, todos, hasher)
