# 헬스체크 (인증 불필요)
# - GET /health            : {"status": "ok"}
# - GET /health?check=db   : MongoDB ping까지 확인, 실패하면 "degraded"

import logging
from typing import Dict, Literal, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...schemas.envelope import Envelope

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class Health(BaseModel):
    status: Literal["ok", "degraded"] = "ok"
    checks: Optional[Dict[str, Literal["ok", "error"]]] = None


@router.get("/health", response_model=Envelope[Health], response_model_exclude_none=True)
async def health_check(request: Request, check: Optional[str] = None):
    health = Health()
    if check == "db":
        client = getattr(request.app.state, "mongo_client", None)
        try:
            if client is None:
                raise RuntimeError("MongoDB client not initialized")
            await client.admin.command("ping")
            health.checks = {"db": "ok"}
        except Exception as e:
            logger.warning(f"[health] database ping failed: {e}")
            health.status = "degraded"
            health.checks = {"db": "error"}
    return Envelope(data=health)
