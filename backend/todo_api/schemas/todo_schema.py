# 할 일 요청/응답 스키마 정의 (Pydantic 모델)

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class TodoCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    due_date: Optional[datetime] = None


class TodoUpdate(BaseModel):
    # 부분 수정: 요청 본문에 들어온 필드만 반영 (exclude_unset으로 구분)
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[datetime] = None

    @field_validator("title", "completed")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class TodoOut(BaseModel):
    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    completed: bool
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class TodoPage(BaseModel):
    items: List[TodoOut]
    total: int
    page: int
    limit: int


def to_out(todo) -> TodoOut:
    return TodoOut(
        id=str(todo.id),
        owner_id=todo.owner_id,
        title=todo.title,
        description=todo.description,
        completed=todo.completed,
        due_date=todo.due_date,
        created_at=todo.created_at,
        updated_at=todo.updated_at,
    )
