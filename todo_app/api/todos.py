"""
Todo 页面与片段接口

端点：
- GET    /                 — 完整页面（列表 + 筛选控件）
- POST   /todos            — 新建，返回主片段
- PATCH  /todos/{id}       — 切换完成状态，返回主片段
- DELETE /todos/{id}       — 删除，主内容为空，筛选控件以 oob 方式刷新计数
- GET    /todos/{id}       — 单条只读片段
- GET    /todos/{id}/edit  — 单条编辑表单片段
- PUT    /todos/{id}       — 重命名，返回单条只读片段
"""

import asyncio

from fastapi import APIRouter, Depends, Form, Request
from starlette.responses import HTMLResponse

from todo_app.api.deps import get_create_delay, get_todo_service, get_views
from todo_app.todo.filters import TodoFilter
from todo_app.todo.service import TodoService
from todo_app.views import TodoViews

router = APIRouter(tags=["todos"])


@router.get("/", response_class=HTMLResponse)
async def list_todos(
    request: Request,
    filter: str | None = None,
    service: TodoService = Depends(get_todo_service),
    views: TodoViews = Depends(get_views),
):
    current = TodoFilter.parse(filter)
    return views.page(request, service.todos, current)


@router.post("/todos", response_class=HTMLResponse)
async def create_todo(
    request: Request,
    todo: str = Form(""),
    filter: str | None = Form(None),
    service: TodoService = Depends(get_todo_service),
    views: TodoViews = Depends(get_views),
    delay: float = Depends(get_create_delay),
):
    current = TodoFilter.parse(filter)
    await service.create(todo)
    if delay > 0:
        await asyncio.sleep(delay)
    return views.main(request, service.todos, current)


@router.patch("/todos/{todo_id}", response_class=HTMLResponse)
async def toggle_todo(
    request: Request,
    todo_id: str,
    filter: str | None = None,
    service: TodoService = Depends(get_todo_service),
    views: TodoViews = Depends(get_views),
):
    current = TodoFilter.parse(filter)
    await service.toggle(todo_id)
    return views.main(request, service.todos, current)


@router.delete("/todos/{todo_id}", response_class=HTMLResponse)
async def delete_todo(
    request: Request,
    todo_id: str,
    filter: str | None = None,
    service: TodoService = Depends(get_todo_service),
    views: TodoViews = Depends(get_views),
):
    current = TodoFilter.parse(filter)
    await service.delete(todo_id)
    return views.filter_controls(request, service.todos, current, oob=True)


@router.get("/todos/{todo_id}", response_class=HTMLResponse)
async def get_todo(
    request: Request,
    todo_id: str,
    filter: str | None = None,
    service: TodoService = Depends(get_todo_service),
    views: TodoViews = Depends(get_views),
):
    current = TodoFilter.parse(filter)
    return views.item(request, service.get(todo_id), current)


@router.get("/todos/{todo_id}/edit", response_class=HTMLResponse)
async def edit_todo(
    request: Request,
    todo_id: str,
    filter: str | None = None,
    service: TodoService = Depends(get_todo_service),
    views: TodoViews = Depends(get_views),
):
    current = TodoFilter.parse(filter)
    return views.item_edit(request, service.get(todo_id), current)


@router.put("/todos/{todo_id}", response_class=HTMLResponse)
async def rename_todo(
    request: Request,
    todo_id: str,
    name: str = Form(""),
    filter: str | None = None,
    service: TodoService = Depends(get_todo_service),
    views: TodoViews = Depends(get_views),
):
    current = TodoFilter.parse(filter)
    todo = await service.rename(todo_id, name)
    return views.item(request, todo, current)
