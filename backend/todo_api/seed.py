# 데모 데이터 적재 스크립트
# 사용법: python -m todo_api.seed
# - 사용자 2명(비밀번호 "password123")과 각자의 할 일 2개씩 생성
# - 이미 있는 이메일은 건너뜀

import asyncio
import logging

from .core.config import get_settings
from .core.security import PasswordHasher
from .main import connect_mongo
from .repositories.todo_repository import TodoRepository
from .repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_DATA = [
    {
        "email": "alice@example.com",
        "name": "Alice Johnson",
        "todos": [
            {"title": "Finish onboarding", "description": "Review project requirements and set up environment"},
            {"title": "Plan weekly tasks", "description": "Create a list of tasks for the week", "completed": True},
        ],
    },
    {
        "email": "bob@example.com",
        "name": "Bob Smith",
        "todos": [
            {"title": "Buy groceries", "description": "Milk, eggs, bread, and vegetables"},
            {"title": "Workout session", "description": "30 minutes of cardio and stretching"},
        ],
    },
]


async def seed(users: UserRepository, todos: TodoRepository, hasher: PasswordHasher) -> int:
    """데모 사용자와 할 일을 넣고, 새로 만든 사용자 수를 반환합니다."""
    created = 0
    password_hash = hasher.hash(DEMO_PASSWORD)
    for entry in DEMO_DATA:
        if await users.get_by_email(entry["email"]):
            logger.info(f"[seed] {entry['email']} already exists, skipping")
            continue
        user = await users.create(entry["email"], password_hash, entry["name"])
        for item in entry["todos"]:
            todo = await todos.create(str(user.id), item["title"], item.get("description"))
            if item.get("completed"):
                await todos.update(todo, {"completed": True})
        created += 1
        logger.info(f"[seed] created {entry['email']} with {len(entry['todos'])} todos")
    return created


async def main():
    settings = get_settings()
    client = await connect_mongo(settings)
    try:
        await seed(UserRepository(), TodoRepository(), PasswordHasher(rounds=settings.BCRYPT_ROUNDS))
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(main())
