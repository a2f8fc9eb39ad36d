# 요청 게이트 (경계 인가 미들웨어)
# - 보호 경로에 유효한 Bearer 토큰 없이 들어온 요청은 401로 차단
# - 통과하면 검증된 클레임을 request.state.claims에 저장
#   (핸들러는 이것이 없으면 직접 다시 검증합니다)

import logging
from typing import Iterable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..schemas.envelope import ErrorEnvelope
from .exceptions import AuthenticationError
from .security import TokenService, extract_bearer

logger = logging.getLogger(__name__)


def is_protected(path: str, prefixes: Iterable[str]) -> bool:
    # "/api/todos"는 "/api/todos"와 "/api/todos/..."를 포함하지만 "/api/todosx"는 아님
    for prefix in prefixes:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


class RequestGateMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, tokens: TokenService, protected_prefixes: Iterable[str]):
        super().__init__(app)
        self.tokens = tokens
        self.protected_prefixes = tuple(protected_prefixes)

    async def dispatch(self, request: Request, call_next):
        # CORS preflight 요청에는 Authorization 헤더가 없음
        if request.method == "OPTIONS" or not is_protected(request.url.path, self.protected_prefixes):
            return await call_next(request)

        token = extract_bearer(request.headers.get("authorization"))
        if token is None:
            logger.info(f"[gate] {request.method} {request.url.path} rejected: missing bearer token")
            return _unauthorized("Unauthorized")

        try:
            request.state.claims = self.tokens.verify(token)
        except AuthenticationError as e:
            logger.info(f"[gate] {request.method} {request.url.path} rejected: {e.message}")
            return _unauthorized("Invalid token")

        return await call_next(request)


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content=ErrorEnvelope(error=message).model_dump(),
        headers={"WWW-Authenticate": "Bearer"},
    )
