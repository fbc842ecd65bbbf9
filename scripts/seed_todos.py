"""
种子数据脚本：向配置的 Store 文件写入示例 Todo

运行方式：
    python scripts/seed_todos.py

幂等设计：按 name 判断是否已存在，存在则跳过。
"""

import asyncio
import sys
from pathlib import Path

# 确保项目根目录在 sys.path 中
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import structlog

from todo_app.config import get_settings
from todo_app.observability.logging_config import setup_logging
from todo_app.todo.service import TodoService
from todo_app.todo.store import JsonFileStore

settings = get_settings()
log = structlog.get_logger()

SEED_TODOS = [
    ("Buy milk", False),
    ("Write the weekly report", False),
    ("Book dentist appointment", True),
]


async def seed() -> int:
    service = await TodoService.load(
        JsonFileStore(settings.DB_FILE), name_max_length=settings.TODO_NAME_MAX_LENGTH
    )
    existing = {todo.name for todo in service.todos}
    inserted = 0
    for name, completed in SEED_TODOS:
        if name in existing:
            continue
        todo = await service.create(name)
        if completed:
            await service.toggle(todo.id)
        inserted += 1
    return inserted


def main() -> None:
    setup_logging(env=settings.ENV, level=settings.LOG_LEVEL)
    inserted = asyncio.run(seed())
    log.info("种子数据写入完成", path=settings.DB_FILE, inserted=inserted)


if __name__ == "__main__":
    main()
