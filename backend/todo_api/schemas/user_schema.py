# 인증/사용자 요청/응답 스키마 정의 (Pydantic 모델)

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    # 응답은 camelCase(accessToken 등), 파이썬 코드에서는 snake_case 이름으로 생성
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)

    @field_validator("email", "name", "password")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class UserPublic(BaseModel):
    id: str
    email: EmailStr
    name: Optional[str] = None
    created_at: datetime


class LoginUser(BaseModel):
    id: str
    email: EmailStr
    name: Optional[str] = None


class Registered(_CamelModel):
    user_id: str


class AccessToken(_CamelModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: LoginUser


def to_public(user) -> UserPublic:
    return UserPublic(id=str(user.id), email=user.email, name=user.name, created_at=user.created_at)
