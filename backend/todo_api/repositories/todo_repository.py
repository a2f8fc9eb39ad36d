# 할 일(Todo) 저장소 레이어
# - 데이터 접근(조회/생성/수정/삭제)만 담당
# - 소유자 검사는 서비스 레이어(services/ownership.py)에서 수행

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from beanie import PydanticObjectId
from bson import ObjectId

from ..models.todo import Todo
from ..models.user import utcnow


class TodoRepository:
    async def get(self, todo_id: str) -> Optional[Todo]:
        # 형식이 잘못된 id는 "없음"으로 취급 (PydanticObjectId 변환 시 예외 방지)
        if not ObjectId.is_valid(todo_id):
            return None
        return await Todo.get(PydanticObjectId(todo_id))

    async def list_for_owner(
        self,
        owner_id: str,
        completed: Optional[bool] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Todo], int]:
        query: Dict[str, Any] = {"owner_id": owner_id}
        if completed is not None:
            query["completed"] = completed

        total = await Todo.find(query).count()
        items = await Todo.find(query).sort("-created_at").skip(skip).limit(limit).to_list()
        return items, total

    async def create(
        self,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
    ) -> Todo:
        todo = Todo(owner_id=owner_id, title=title, description=description, due_date=due_date)
        return await todo.insert()

    async def update(self, todo: Todo, changes: Dict[str, Any]) -> Todo:
        if not changes:
            return todo
        await todo.set({**changes, "updated_at": utcnow()})
        return todo

    async def delete(self, todo: Todo) -> None:
        await todo.delete()

    async def delete_for_owner(self, owner_id: str) -> int:
        result = await Todo.find({"owner_id": owner_id}).delete()
        return result.deleted_count if result else 0
