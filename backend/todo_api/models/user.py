# User 도메인 모델 (Beanie Document)
# - 이메일, 이름(선택), 비밀번호 해시, 생성일
# - 이메일은 unique 인덱스

from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Indexed
from pydantic import EmailStr, Field


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class User(Document):
    email: Indexed(EmailStr, unique=True)
    name: Optional[str] = None
    hashed_password: str = Field(repr=False)
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "users"
