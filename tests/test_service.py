from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from tests.conftest import FailingStore
from todo_app.todo.errors import PersistenceError, TodoNotFoundError, TodoValidationError
from todo_app.todo.service import TodoService
from todo_app.todo.schemas import StoreDocument
from todo_app.todo.store import JsonFileStore


def _load(path: Path, **kwargs) -> TodoService:
    return asyncio.run(TodoService.load(JsonFileStore(path), **kwargs))


def _on_disk(path: Path) -> list[dict]:
    return json.loads(path.read_text(encoding="utf-8"))["todos"]


def test_every_mutation_is_flushed(db_file: Path) -> None:
    service = _load(db_file)

    todo = asyncio.run(service.create("Buy milk"))
    assert _on_disk(db_file) == [{"id": todo.id, "name": "Buy milk", "completed": False}]

    asyncio.run(service.toggle(todo.id))
    assert _on_disk(db_file)[0]["completed"] is True

    asyncio.run(service.rename(todo.id, "Buy oat milk"))
    assert _on_disk(db_file)[0]["name"] == "Buy oat milk"

    asyncio.run(service.delete(todo.id))
    assert _on_disk(db_file) == []


def test_state_survives_reload(db_file: Path) -> None:
    service = _load(db_file)
    todo = asyncio.run(service.create("Buy milk"))
    asyncio.run(service.toggle(todo.id))

    reloaded = _load(db_file)

    assert reloaded.get(todo.id).model_dump() == service.get(todo.id).model_dump()


def test_create_strips_and_validates_names(db_file: Path) -> None:
    service = _load(db_file, name_max_length=5)

    assert asyncio.run(service.create("  abc  ")).name == "abc"
    with pytest.raises(TodoValidationError):
        asyncio.run(service.create("   "))
    with pytest.raises(TodoValidationError):
        asyncio.run(service.create("abcdef"))
    assert len(service.todos) == 1


def test_rename_rejects_empty_name(db_file: Path) -> None:
    service = _load(db_file)
    todo = asyncio.run(service.create("Buy milk"))

    with pytest.raises(TodoValidationError):
        asyncio.run(service.rename(todo.id, ""))

    assert service.get(todo.id).name == "Buy milk"


def test_get_missing_raises_not_found(db_file: Path) -> None:
    service = _load(db_file)

    with pytest.raises(TodoNotFoundError):
        service.get("missing")


def test_persistence_failure_rolls_back_memory(db_file: Path) -> None:
    service = _load(db_file)
    todo = asyncio.run(service.create("Buy milk"))
    service.store = FailingStore(db_file)

    with pytest.raises(PersistenceError):
        asyncio.run(service.toggle(todo.id))
    with pytest.raises(PersistenceError):
        asyncio.run(service.create("Another"))
    with pytest.raises(PersistenceError):
        asyncio.run(service.delete(todo.id))

    assert [t.model_dump() for t in service.todos] == [
        {"id": todo.id, "name": "Buy milk", "completed": False}
    ]
    assert _on_disk(db_file) == [{"id": todo.id, "name": "Buy milk", "completed": False}]


def test_concurrent_mutations_all_persist(db_file: Path) -> None:
    service = _load(db_file)

    async def create_many() -> None:
        await asyncio.gather(*(service.create(f"todo {i}") for i in range(10)))

    asyncio.run(create_many())

    names = sorted(t["name"] for t in _on_disk(db_file))
    assert names == sorted(f"todo {i}" for i in range(10))


class SlowStore(JsonFileStore):
    """save 挂起直到被取消，模拟关停时中断写盘"""

    def __init__(self, path: Path):
        super().__init__(path)
        self.save_started = asyncio.Event()

    async def save(self, document) -> None:
        self.save_started.set()
        await asyncio.sleep(10)
        await super().save(document)


def test_cancelled_save_rolls_back_memory(db_file: Path) -> None:
    store = SlowStore(db_file)
    service = TodoService(store, StoreDocument())

    async def create_then_cancel() -> None:
        task = asyncio.create_task(service.create("Buy milk"))
        await store.save_started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(create_then_cancel())

    assert service.todos == []
    assert not db_file.exists()
