# FastAPI 진입점
# - create_app(): 명시적으로 받은 Settings로 앱 생성
# - 비밀번호 해셔와 토큰 서비스는 여기서 한 번만 만들어 app.state에 보관
# - 요청 게이트 미들웨어, CORS, 예외 핸들러(응답 봉투 형식)
# - 시작 시 Beanie ODM 초기화 (MongoDB)
# - run(): uvicorn으로 HOST:PORT에서 실행 (todo-api 명령)

import logging

import uvicorn
from beanie import init_beanie
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.auth import router as auth_router
from .api.v1.health import router as health_router
from .api.v1.todos import router as todos_router
from .api.v1.users import router as users_router
from .core.config import Settings, get_settings
from .core.exceptions import AuthenticationError, TodoAppError, ValidationError
from .core.gate import RequestGateMiddleware
from .core.retry import create_db_retry_decorator
from .core.security import PasswordHasher, TokenService
from .models.todo import Todo
from .models.user import User
from .schemas.envelope import ErrorEnvelope

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [User, Todo]


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorEnvelope(error=message).model_dump(), headers=headers)


async def connect_mongo(settings: Settings) -> AsyncIOMotorClient:
    """MongoDB 연결 -> ping(재시도 포함) -> Beanie 초기화. 끝내 연결되지 않으면 예외를 그대로 올립니다."""
    client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=5000)

    @create_db_retry_decorator(max_attempts=settings.DB_CONNECT_ATTEMPTS)
    async def ping():
        await client.admin.command("ping")

    await ping()
    await init_beanie(database=client.get_default_database(), document_models=DOCUMENT_MODELS)
    logger.info(f"[mongo] connected: {settings.MONGODB_URI}")
    return client


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(TodoAppError)
    async def app_error_handler(request: Request, exc: TodoAppError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return _error(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"[api] invalid input on {request.method} {request.url.path}: {exc.errors()}")
        error = ValidationError()
        return _error(error.status_code, error.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"[api] unexpected error on {request.method} {request.url.path}")
        message = str(exc) if settings.EXPOSE_ERROR_DETAILS and str(exc) else "Internal server error"
        return _error(500, message)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s:%(name)s: %(message)s")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Per-user todo lists with bearer-token authentication",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.token_service = TokenService(
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS,
    )
    app.state.mongo_client = None

    # 게이트를 먼저 등록해야 나중에 등록한 CORS가 바깥에서 preflight를 처리합니다
    app.add_middleware(
        RequestGateMiddleware,
        tokens=app.state.token_service,
        protected_prefixes=settings.protected_paths,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    @app.on_event("startup")
    async def app_init():
        app.state.mongo_client = await connect_mongo(settings)

    @app.on_event("shutdown")
    async def app_shutdown():
        if app.state.mongo_client is not None:
            app.state.mongo_client.close()

    prefix = settings.API_PREFIX.rstrip("/")
    app.include_router(health_router, prefix=prefix)
    app.include_router(auth_router, prefix=prefix)
    app.include_router(todos_router, prefix=prefix)
    app.include_router(users_router, prefix=prefix)
    return app


app = create_app()


def run():
    settings = get_settings()
    uvicorn.run("todo_api.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
