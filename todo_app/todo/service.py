"""
TodoService：显式持有的单实例状态对象

lifespan 启动时从 Store 载入一次文档并挂到 app.state，handler 通过依赖注入取得。
每次变更 = 内存修改 + 立即 save：
- 变更与写盘在同一把锁内串行执行，同进程内的并发请求不会互相覆盖
- 写盘失败时把内存文档回滚到变更前快照，内存与磁盘不分叉
"""

import asyncio
from collections.abc import Callable
from typing import TypeVar

import structlog

from todo_app.observability.metrics import MUTATION_TOTAL
from todo_app.todo.errors import PersistenceError, TodoNotFoundError, TodoValidationError
from todo_app.todo.repository import TodoRepository
from todo_app.todo.schemas import StoreDocument, Todo
from todo_app.todo.store import JsonFileStore

log = structlog.get_logger()

T = TypeVar("T")


class TodoService:
    def __init__(
        self,
        store: JsonFileStore,
        document: StoreDocument,
        name_max_length: int = 200,
    ):
        self.store = store
        self._document = document
        self._repo = TodoRepository(document)
        self._name_max_length = name_max_length
        self._lock = asyncio.Lock()

    @classmethod
    async def load(cls, store: JsonFileStore, name_max_length: int = 200) -> "TodoService":
        """启动时载入文档（整个进程只读一次）"""
        document = await store.load()
        log.info("Todo 文档已载入", path=str(store.path), count=len(document.todos))
        return cls(store, document, name_max_length=name_max_length)

    # ── 查询 ──

    @property
    def todos(self) -> list[Todo]:
        return self._repo.todos

    def get(self, todo_id: str) -> Todo:
        todo = self._repo.find_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    # ── 变更 ──

    async def create(self, name: str) -> Todo:
        name = self._validate_name(name)
        todo = await self._mutate("create", lambda: self._repo.add(name))
        log.info("Todo 已创建", todo_id=todo.id)
        return todo

    async def toggle(self, todo_id: str) -> Todo:
        todo = await self._mutate("toggle", lambda: self._repo.toggle(todo_id))
        log.info("Todo 状态已切换", todo_id=todo_id, completed=todo.completed)
        return todo

    async def rename(self, todo_id: str, name: str) -> Todo:
        name = self._validate_name(name)
        todo = await self._mutate("rename", lambda: self._repo.rename(todo_id, name))
        log.info("Todo 已重命名", todo_id=todo_id)
        return todo

    async def delete(self, todo_id: str) -> Todo:
        todo = await self._mutate("delete", lambda: self._repo.remove(todo_id))
        log.info("Todo 已删除", todo_id=todo_id)
        return todo

    async def _mutate(self, action: str, change: Callable[[], T]) -> T:
        async with self._lock:
            snapshot = self._document.model_copy(deep=True)
            result = change()
            try:
                await self.store.save(self._document)
            except BaseException as e:
                # 写盘失败或被取消都回滚内存，保证下一次 save 之前内存与磁盘一致
                self._document.todos = snapshot.todos
                if isinstance(e, PersistenceError):
                    log.error("Todo 变更未持久化，已回滚内存", action=action)
                else:
                    log.warning("Todo 变更被中断，已回滚内存", action=action, error=repr(e))
                raise
        MUTATION_TOTAL.labels(action=action).inc()
        return result

    def _validate_name(self, name: str | None) -> str:
        name = (name or "").strip()
        if not name:
            raise TodoValidationError("Todo name must not be empty")
        if len(name) > self._name_max_length:
            raise TodoValidationError(
                f"Todo name must be at most {self._name_max_length} characters"
            )
        return name
