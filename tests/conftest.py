from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo_app.config import Settings
from todo_app.main import create_app
from todo_app.todo.errors import PersistenceError
from todo_app.todo.schemas import StoreDocument
from todo_app.todo.store import JsonFileStore


class FailingStore(JsonFileStore):
    """save 永远失败的 Store，用于验证回滚"""

    async def save(self, document: StoreDocument) -> None:
        raise PersistenceError(cause=OSError("disk full"))


@pytest.fixture()
def db_file(tmp_path: Path) -> Path:
    return tmp_path / "db.json"


@pytest.fixture()
def settings(db_file: Path) -> Settings:
    return Settings(DB_FILE=str(db_file), TODO_CREATE_DELAY_SECONDS=0, ENV="test")


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def create_todo(client: TestClient, name: str, filter: str | None = None) -> str:
    """通过 HTTP 新建一条 Todo，返回其 id"""
    data = {"todo": name}
    if filter is not None:
        data["filter"] = filter
    response = client.post("/todos", data=data)
    assert response.status_code == 200
    return client.app.state.todo_service.todos[-1].id
