from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from todo_app.todo.errors import PersistenceError
from todo_app.todo.schemas import StoreDocument, Todo
from todo_app.todo.store import JsonFileStore


def test_load_missing_file_returns_empty_document(db_file: Path) -> None:
    document = asyncio.run(JsonFileStore(db_file).load())

    assert document.todos == []


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"todos": "nope"}),
        json.dumps({"todos": [{"id": "1", "name": "a"}, {"id": "1", "name": "b"}]}),
        b"\xff\xfe garbage",
    ],
)
def test_load_invalid_content_returns_empty_document(db_file: Path, content: str | bytes) -> None:
    if isinstance(content, bytes):
        db_file.write_bytes(content)
    else:
        db_file.write_text(content, encoding="utf-8")

    document = asyncio.run(JsonFileStore(db_file).load())

    assert document.todos == []


def test_save_writes_todos_document_layout(db_file: Path) -> None:
    document = StoreDocument(todos=[Todo(id="t1", name="Buy milk")])

    asyncio.run(JsonFileStore(db_file).save(document))

    assert json.loads(db_file.read_text(encoding="utf-8")) == {
        "todos": [{"id": "t1", "name": "Buy milk", "completed": False}]
    }


def test_save_load_roundtrip_is_byte_stable(db_file: Path) -> None:
    store = JsonFileStore(db_file)
    document = StoreDocument(
        todos=[Todo(name="Kaffee kaufen"), Todo(name="写周报", completed=True)]
    )
    asyncio.run(store.save(document))
    first = db_file.read_bytes()

    asyncio.run(store.save(asyncio.run(store.load())))

    assert db_file.read_bytes() == first


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "db.json"

    asyncio.run(JsonFileStore(path).save(StoreDocument()))

    assert path.exists()
    assert [p.name for p in path.parent.iterdir()] == ["db.json"]


def test_save_failure_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileStore(blocker / "db.json")

    with pytest.raises(PersistenceError):
        asyncio.run(store.save(StoreDocument()))
