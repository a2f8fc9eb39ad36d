# 할 일(Todo) 서비스 레이어
# - 인증된 사용자 본인의 할 일 목록/생성/조회/수정/삭제
# - 단건 작업은 모두 authorize_owner를 먼저 통과한 뒤에만 저장소를 건드립니다

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends

from ..core.exceptions import ValidationError
from ..core.security import TokenClaims
from ..models.todo import Todo
from ..repositories.todo_repository import TodoRepository
from .ownership import authorize_owner

logger = logging.getLogger(__name__)

MAX_LIMIT = 100
# (MAX_PAGE - 1) * MAX_LIMIT 가 BSON int64 범위를 한참 밑돌도록 잡은 상한
MAX_PAGE = 1_000_000


class TodoService:
    def __init__(self, repo: TodoRepository):
        self.repo = repo

    async def list(
        self, claims: TokenClaims, page: int = 1, limit: int = 20, completed: Optional[bool] = None
    ) -> Tuple[List[Todo], int]:
        if not (1 <= page <= MAX_PAGE and 1 <= limit <= MAX_LIMIT):
            raise ValidationError()
        return await self.repo.list_for_owner(
            claims.subject, completed=completed, skip=(page - 1) * limit, limit=limit
        )

    async def create(self, claims: TokenClaims, title: str, description=None, due_date=None) -> Todo:
        # 소유자는 항상 토큰의 subject. 요청 본문 값은 쓰지 않습니다.
        todo = await self.repo.create(claims.subject, title, description or None, due_date)
        logger.info(f"[todos] {claims.subject} created todo {todo.id}")
        return todo

    async def get(self, claims: TokenClaims, todo_id: str) -> Todo:
        todo = await self.repo.get(todo_id)
        return authorize_owner(todo, claims, "Todo", todo_id)

    async def update(self, claims: TokenClaims, todo_id: str, changes: Dict[str, Any]) -> Todo:
        todo = await self.get(claims, todo_id)
        if "description" in changes:
            changes["description"] = changes["description"] or None
        return await self.repo.update(todo, changes)

    async def delete(self, claims: TokenClaims, todo_id: str) -> None:
        todo = await self.get(claims, todo_id)
        await self.repo.delete(todo)
        logger.info(f"[todos] {claims.subject} deleted todo {todo_id}")


def get_todo_service(repo: TodoRepository = Depends(TodoRepository)) -> TodoService:
    return TodoService(repo)
