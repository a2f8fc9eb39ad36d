# 리소스 소유자 검사 정책 (할 일/사용자 서비스 공통)
# 조회 -> (없음: 404) -> 소유자와 토큰 subject 비교 -> (불일치: 403) -> 작업 수행

import logging

from ..core.exceptions import AuthorizationError, NotFoundError
from ..core.security import TokenClaims

logger = logging.getLogger(__name__)


def authorize_owner(resource, claims: TokenClaims, kind: str, resource_id: str, owner_attr: str = "owner_id"):
    """호출자가 소유한 리소스라면 그대로 반환합니다.

    반드시 쓰기 작업보다 먼저 호출해야 합니다. 거부된 요청은 저장소를 건드리면 안 됩니다.
    """
    if resource is None:
        raise NotFoundError(f"{kind} not found")
    if str(getattr(resource, owner_attr)) != claims.subject:
        logger.warning(f"[ownership] subject {claims.subject} denied access to {kind.lower()} {resource_id}")
        raise AuthorizationError()
    return resource
