"""
FastAPI 依赖注入：从 app.state 取出 lifespan 中创建的单例
"""

from fastapi import Request

from todo_app.todo.service import TodoService
from todo_app.views import TodoViews


def get_todo_service(request: Request) -> TodoService:
    """lifespan 中载入的 TodoService"""
    return request.app.state.todo_service


def get_views(request: Request) -> TodoViews:
    return request.app.state.views


def get_create_delay(request: Request) -> float:
    """新建 Todo 后的人为延迟（秒），测试中可 override 为 0"""
    return request.app.state.settings.TODO_CREATE_DELAY_SECONDS
