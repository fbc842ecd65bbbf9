"""
Todo 模块：任务列表的数据模型、JSON 文件存储、变更逻辑与筛选

handler 只依赖 TodoService；Repository / Store 不直接暴露给 API 层。
"""

from todo_app.todo.filters import TodoFilter
from todo_app.todo.schemas import StoreDocument, Todo
from todo_app.todo.service import TodoService
from todo_app.todo.store import JsonFileStore

__all__ = ["JsonFileStore", "StoreDocument", "Todo", "TodoFilter", "TodoService"]
