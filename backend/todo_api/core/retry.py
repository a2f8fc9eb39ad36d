# 재시도 로직 유틸리티
# 주니어 개발자님께: docker-compose나 CI에서는 API가 뜰 때 MongoDB가 아직 준비되지 않았을 수 있습니다.
# 그래서 시작 시 연결 확인(ping)만 tenacity로 지수 백오프 재시도합니다.
# 요청 처리 중에는 재시도하지 않고, 실패는 바로 호출자에게 돌려줍니다.

import logging
from typing import Tuple, Type

from pymongo.errors import ConnectionFailure
from tenacity import (
    after_log,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


def create_db_retry_decorator(
    max_attempts: int = 5,
    initial_wait: float = 0.5,
    max_wait: float = 8.0,
    exceptions: Tuple[Type[Exception], ...] = (ConnectionFailure,),
):
    """
    DB 연결 확인용 재시도 데코레이터를 생성하는 팩토리 함수입니다.

    1. max_attempts: 최대 시도 횟수 (5면 처음 1번 + 재시도 4번)
    2. initial_wait: 첫 재시도 전 대기 시간(초). 실패할 때마다 2배씩 늘어납니다.
    3. max_wait: 최대 대기 시간(초)
    4. exceptions: 재시도할 예외 타입. 마지막 시도까지 실패하면 원래 예외를 그대로 올립니다.

    사용 예시:
        @create_db_retry_decorator(max_attempts=3)
        async def ping():
            await client.admin.command("ping")
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=2, min=initial_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        after=after_log(logger, logging.DEBUG),
        reraise=True,
    )
