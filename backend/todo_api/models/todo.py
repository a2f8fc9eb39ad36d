# 할 일(Todo) 도메인 모델 (Beanie Document)
# - owner_id는 생성 시 정해지고 이후 바뀌지 않음
# - 목록 조회는 항상 "소유자 1명, 최신순"이라 복합 인덱스 사용

from datetime import datetime
from typing import Optional

import pymongo
from beanie import Document, Indexed
from pydantic import Field
from pymongo import IndexModel

from .user import utcnow


class Todo(Document):
    owner_id: Indexed(str)
    title: str
    description: Optional[str] = None
    completed: bool = False
    due_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "todos"
        indexes = [
            IndexModel([("owner_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)]),
        ]
