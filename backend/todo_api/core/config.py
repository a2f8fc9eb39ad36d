# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보 (JWT 비밀키만은 반드시 직접 설정)

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트 루트 디렉토리 경로 찾기
# 주니어 개발자님께: 이 파일은 backend/todo_api/core/config.py에 있으므로,
# 3단계 상위로 올라가면 프로젝트 루트가 됩니다.
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "todo-api"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    MONGODB_URI: str = "mongodb://localhost:27017/todo_app"
    # 시작 시 MongoDB ping 최대 시도 횟수 (core/retry.py 참고)
    DB_CONNECT_ATTEMPTS: int = Field(default=5, ge=1)

    JWT_SECRET_KEY: str = Field(..., min_length=1, description="JWT 토큰 서명에 사용되는 비밀키. 바꾸면 발급된 모든 토큰이 무효가 됩니다.")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = Field(default=86400, gt=0)

    # bcrypt 비용 인자 (2^rounds 번 반복). 10 미만은 허용하지 않습니다.
    BCRYPT_ROUNDS: int = Field(default=12, ge=10, le=31)

    API_PREFIX: str = "/api"
    # 요청 게이트가 보호하는 경로 (API_PREFIX 기준 상대 경로)
    PROTECTED_PREFIXES: List[str] = ["/todos", "/users", "/auth/me"]

    CORS_ALLOW_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # 500 응답에 예외 메시지를 그대로 노출할지 여부. 디버깅할 때만 켜세요.
    EXPOSE_ERROR_DETAILS: bool = False

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # 주니어 개발자님께: frozen=True 이므로 시작 후에는 설정을 바꿀 수 없습니다.
        frozen=True,
    )

    @property
    def protected_paths(self) -> List[str]:
        return [self.API_PREFIX.rstrip("/") + p for p in self.PROTECTED_PREFIXES]

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
