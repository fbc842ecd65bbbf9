"""
领域异常 → HTTP 响应的统一翻译（纯文本响应体）
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from todo_app.observability.metrics import ERROR_TOTAL
from todo_app.todo.errors import TodoError

log = structlog.get_logger()


async def todo_error_handler(request: Request, exc: TodoError) -> PlainTextResponse:
    ERROR_TOTAL.labels(error_type=exc.error_type).inc()
    if exc.status_code >= 500:
        log.error(
            "请求处理失败",
            path=request.url.path,
            error_type=exc.error_type,
            error=str(getattr(exc, "cause", None) or exc),
        )
    else:
        log.info(
            "请求被拒绝",
            path=request.url.path,
            status_code=exc.status_code,
            error_type=exc.error_type,
        )
    return PlainTextResponse(exc.detail, status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TodoError, todo_error_handler)
