# 보안/인증 유틸리티
# - 비밀번호 해싱/검증 (passlib bcrypt)
# - JWT 액세스 토큰 발급/검증
# - Authorization 헤더에서 Bearer 토큰 추출
# - 현재 사용자 클레임 가져오기(의존성)

import time
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, Request
from passlib.context import CryptContext

from .exceptions import AuthenticationError, InvalidSignature, MalformedToken, TokenExpired


BEARER_PREFIX = "Bearer "


class PasswordHasher:
    """솔트를 붙인 단방향 비밀번호 해시

    결과는 $2b$<rounds>$<salt><hash> 형태의 bcrypt 문자열이라 비용 인자가 함께 저장되고,
    호출할 때마다 새 솔트를 씁니다. 두 연산 모두 CPU를 오래 쓰므로
    요청 핸들러에서는 run_in_threadpool로 호출합니다.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        # passlib은 알아볼 수 없는 해시에 예외를 던집니다 -> False로 처리
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            return False


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: str
    issued_at: int
    expires_at: int


class TokenService:
    """서버에 저장하지 않는(stateless) HS256 Bearer 토큰 발급/검증

    토큰에는 {sub, email, iat, exp}만 담깁니다. 서버에 기록이 없으므로 사용자가 삭제되어도
    토큰은 만료 전까지 유효하고, 핸들러가 사용자를 조회할 때 비로소 드러납니다.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", lifetime_seconds: int = 86400):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime_seconds = lifetime_seconds

    def issue(self, subject: str, email: str, now: Optional[int] = None) -> str:
        issued_at = int(time.time()) if now is None else int(now)
        payload = {
            "sub": str(subject),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime_seconds,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "email", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired()
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError):
            raise InvalidSignature()
        except jwt.InvalidTokenError as e:
            raise MalformedToken(f"Malformed token: {e}")

        subject, email = payload["sub"], payload["email"]
        if not isinstance(subject, str) or not subject or not isinstance(email, str):
            raise MalformedToken()
        try:
            return TokenClaims(
                subject=subject,
                email=email,
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
        except (TypeError, ValueError):
            raise MalformedToken()


def extract_bearer(header_value: Optional[str]) -> Optional[str]:
    """Authorization 헤더 값 "Bearer <token>" 에서 토큰을 꺼냅니다. 형식이 다르면 None.

    "Bearer"는 대소문자를 구분하고 뒤에 공백 한 칸이 있어야 합니다.
    """
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):]
    return token or None


# ---- FastAPI 의존성 ----
# 해셔와 토큰 서비스는 create_app()이 Settings로 한 번 만들어 app.state에 둡니다.
# 서명 비밀키를 들고 있는 곳은 토큰 서비스 하나뿐입니다.

def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


async def get_current_claims(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    # 보호 경로는 요청 게이트가 이미 검증했으므로 그 결과를 재사용
    claims = getattr(request.state, "claims", None)
    if claims is not None:
        return claims

    token = extract_bearer(request.headers.get("authorization"))
    if token is None:
        raise AuthenticationError()
    return tokens.verify(token)
