# 사용자 라우터 (Bearer 토큰 필요, 본인 id에 대해서만 가능)
# - GET    /users/{id}
# - PUT    /users/{id}  : 이메일 / 이름 / 비밀번호 변경
# - DELETE /users/{id}  : 계정과 해당 사용자의 할 일 삭제

from fastapi import APIRouter, Depends

from ...core.security import TokenClaims, get_current_claims
from ...schemas.envelope import Deleted, Envelope
from ...schemas.user_schema import UserPublic, UserUpdate, to_public
from ...services.user_service import UserService, get_user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=Envelope[UserPublic])
async def get_user(
    user_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    service: UserService = Depends(get_user_service),
):
    user = await service.get(claims, user_id)
    return Envelope(data=to_public(user))


@router.put("/{user_id}", response_model=Envelope[UserPublic])
async def update_user(
    user_id: str,
    payload: UserUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    service: UserService = Depends(get_user_service),
):
    user = await service.update(claims, user_id, payload.model_dump(exclude_unset=True))
    return Envelope(data=to_public(user))


@router.delete("/{user_id}", response_model=Envelope[Deleted])
async def delete_user(
    user_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    service: UserService = Depends(get_user_service),
):
    await service.delete(claims, user_id)
    return Envelope(data=Deleted())
