# 인증 서비스 레이어
# - 이메일 중복 체크, 회원가입 (비밀번호 해시는 스레드풀에서 계산)
# - 로그인 (비밀번호 검증, JWT 액세스 토큰 발급)
# - 토큰 주인(subject)의 프로필 조회

import logging
from typing import Optional

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import EmailStr

from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError
from ..core.security import (
    PasswordHasher,
    TokenClaims,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user_schema import AccessToken, LoginUser

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, email: EmailStr, password: str, name: Optional[str] = None) -> User:
        existing = await self.repo.get_by_email(email)
        if existing:
            raise ConflictError("Email already registered")
        hashed = await run_in_threadpool(self.hasher.hash, password)
        user = await self.repo.create(email, hashed, name)
        logger.info(f"[auth] registered user {user.id}")
        return user

    async def login(self, email: EmailStr, password: str) -> AccessToken:
        user = await self.repo.get_by_email(email)
        if not user or not await run_in_threadpool(self.hasher.verify, password, user.hashed_password):
            logger.info(f"[auth] failed login for {email}")
            raise AuthenticationError("Invalid credentials")
        token = self.tokens.issue(str(user.id), user.email)
        return AccessToken(
            access_token=token,
            expires_in=self.tokens.lifetime_seconds,
            user=LoginUser(id=str(user.id), email=user.email, name=user.name),
        )

    async def me(self, claims: TokenClaims) -> User:
        # 토큰은 서버에 저장되지 않으므로 삭제된 사용자의 토큰도 만료 전까지는 유효합니다
        user = await self.repo.get(claims.subject)
        if not user:
            raise NotFoundError("User not found")
        return user


def get_auth_service(
    repo: UserRepository = Depends(UserRepository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(repo, hasher, tokens)
