# 사용자 저장소 레이어
# - 데이터 접근(조회/생성/수정/삭제)만 담당 (서비스 로직 분리)
# - email 유니크 인덱스 위반(DuplicateKeyError)은 ConflictError(409)로 변환

from typing import Any, Dict, Optional

from beanie import PydanticObjectId
from bson import ObjectId
from pydantic import EmailStr
from pymongo.errors import DuplicateKeyError

from ..core.exceptions import ConflictError
from ..models.user import User


class UserRepository:
    async def get(self, user_id: str) -> Optional[User]:
        if not ObjectId.is_valid(user_id):
            return None
        return await User.get(PydanticObjectId(user_id))

    async def get_by_email(self, email: EmailStr) -> Optional[User]:
        return await User.find_one({"email": email})

    async def create(self, email: EmailStr, hashed_password: str, name: Optional[str] = None) -> User:
        user = User(email=email, hashed_password=hashed_password, name=name)
        try:
            return await user.insert()
        except DuplicateKeyError:
            raise ConflictError("Email already registered")

    async def update(self, user: User, changes: Dict[str, Any]) -> User:
        if not changes:
            return user
        try:
            await user.set(changes)
        except DuplicateKeyError:
            raise ConflictError("Email already registered")
        return user

    async def delete(self, user: User) -> None:
        await user.delete()
