# 인증 라우터
# - 회원가입: POST /auth/register
# - 로그인:   POST /auth/login
# - 내 정보:  GET  /auth/me  (Bearer 토큰 필요)

from fastapi import APIRouter, Depends, status

from ...core.security import TokenClaims, get_current_claims
from ...schemas.envelope import Envelope
from ...schemas.user_schema import AccessToken, Registered, UserCreate, UserLogin, UserPublic, to_public
from ...services.auth_service import AuthService, get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[Registered],
    summary="Register (email must be unused)",
)
async def register(payload: UserCreate, service: AuthService = Depends(get_auth_service)):
    user = await service.register(payload.email, payload.password, payload.name)
    return Envelope(data=Registered(user_id=str(user.id)))


@router.post("/login", response_model=Envelope[AccessToken], summary="Log in and receive a bearer token")
async def login(payload: UserLogin, service: AuthService = Depends(get_auth_service)):
    token = await service.login(payload.email, payload.password)
    return Envelope(data=token)


@router.get("/me", response_model=Envelope[UserPublic], summary="Profile of the token's subject")
async def me(
    claims: TokenClaims = Depends(get_current_claims),
    service: AuthService = Depends(get_auth_service),
):
    user = await service.me(claims)
    return Envelope(data=to_public(user))
