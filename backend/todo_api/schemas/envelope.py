# 모든 엔드포인트가 공유하는 응답 봉투(envelope)
# - 성공: {"success": true, "data": ...}
# - 실패: {"success": false, "error": "..."} (main.py의 예외 핸들러가 생성)

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str


class Deleted(BaseModel):
    deleted: bool = True
