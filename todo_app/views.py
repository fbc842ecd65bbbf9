"""
视图渲染：Jinja2 模板 + view-model 组装

模板名与 view-model 结构在此集中定义，handler 只决定渲染哪一种片段。
"""

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import HTMLResponse

from todo_app.todo.filters import TodoFilter, apply_filter, filter_options
from todo_app.todo.schemas import Todo

PAGE = "index.html"
MAIN = "partials/main.html"
TODO_ITEM = "partials/todo_item.html"
TODO_ITEM_EDIT = "partials/todo_item_edit.html"
FILTER_CONTROLS = "partials/filter_controls.html"


def list_view_model(todos: list[Todo], current: TodoFilter) -> dict:
    """列表页 / 主片段的 view-model：当前子集 + 各 filter 计数"""
    return {
        "todos": apply_filter(todos, current),
        "filters": filter_options(todos, current),
        "current_filter": current.value,
        "total": len(todos),
    }


class TodoViews:
    def __init__(self, templates_dir: str):
        self.templates = Jinja2Templates(directory=templates_dir)

    def _render(self, request: Request, name: str, context: dict) -> HTMLResponse:
        return self.templates.TemplateResponse(request, name, context)

    def page(self, request: Request, todos: list[Todo], current: TodoFilter) -> HTMLResponse:
        return self._render(request, PAGE, list_view_model(todos, current))

    def main(self, request: Request, todos: list[Todo], current: TodoFilter) -> HTMLResponse:
        return self._render(request, MAIN, list_view_model(todos, current))

    def item(self, request: Request, todo: Todo, current: TodoFilter) -> HTMLResponse:
        return self._render(request, TODO_ITEM, {"todo": todo, "current_filter": current.value})

    def item_edit(self, request: Request, todo: Todo, current: TodoFilter) -> HTMLResponse:
        return self._render(
            request, TODO_ITEM_EDIT, {"todo": todo, "current_filter": current.value}
        )

    def filter_controls(
        self, request: Request, todos: list[Todo], current: TodoFilter, oob: bool = False
    ) -> HTMLResponse:
        return self._render(
            request,
            FILTER_CONTROLS,
            {
                "filters": filter_options(todos, current),
                "current_filter": current.value,
                "oob": oob,
            },
        )
