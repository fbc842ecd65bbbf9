"""
Todo Repository：内存文档上的变更逻辑

直接操作 StoreDocument.todos，不负责持久化（由 TodoService 在变更后 save）。
"""

from todo_app.todo.errors import TodoNotFoundError
from todo_app.todo.schemas import StoreDocument, Todo


class TodoRepository:
    def __init__(self, document: StoreDocument):
        self._document = document

    @property
    def todos(self) -> list[Todo]:
        return self._document.todos

    def add(self, name: str) -> Todo:
        """新建 Todo（completed=False）并追加到末尾"""
        todo = Todo(name=name)
        self._document.todos.append(todo)
        return todo

    def find_by_id(self, todo_id: str) -> Todo | None:
        """线性查找，未命中返回 None"""
        for todo in self._document.todos:
            if todo.id == todo_id:
                return todo
        return None

    def toggle(self, todo_id: str) -> Todo:
        todo = self._require(todo_id)
        todo.completed = not todo.completed
        return todo

    def rename(self, todo_id: str, name: str) -> Todo:
        todo = self._require(todo_id)
        todo.name = name
        return todo

    def remove(self, todo_id: str) -> Todo:
        """按 id 删除，不按下标，列表在同一请求内被改动也不会删错"""
        todo = self._require(todo_id)
        self._document.todos = [t for t in self._document.todos if t.id != todo_id]
        return todo

    def _require(self, todo_id: str) -> Todo:
        todo = self.find_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo
