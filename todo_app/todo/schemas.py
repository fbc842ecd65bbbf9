"""
Todo 数据模型

Todo 为单条任务；StoreDocument 为落盘的完整文档 {"todos": [...]}，
顺序即展示顺序。
"""

import uuid

from pydantic import BaseModel, Field, field_validator


def new_todo_id() -> str:
    """服务端生成的不可变 id"""
    return str(uuid.uuid4())


class Todo(BaseModel):
    """单个 Todo 条目"""

    id: str = Field(default_factory=new_todo_id)
    name: str
    completed: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_str(cls, v: object) -> str:
        """手工编辑过的 db.json 里 id 可能是整数，统一转为字符串"""
        return str(v)


class StoreDocument(BaseModel):
    """全部持久化状态"""

    todos: list[Todo] = Field(default_factory=list)

    @field_validator("todos")
    @classmethod
    def ids_must_be_unique(cls, todos: list[Todo]) -> list[Todo]:
        seen: set[str] = set()
        for todo in todos:
            if todo.id in seen:
                raise ValueError(f"重复的 todo id: {todo.id}")
            seen.add(todo.id)
        return todos
