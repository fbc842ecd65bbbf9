"""
FastAPI 应用主入口
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from todo_app.api.errors import register_exception_handlers
from todo_app.api.health import router as health_router
from todo_app.api.todos import router as todos_router
from todo_app.config import Settings, get_settings
from todo_app.observability.logging_config import setup_logging
from todo_app.observability.metrics_middleware import MetricsMiddleware
from todo_app.observability.request_logger import RequestLoggerMiddleware
from todo_app.todo.service import TodoService
from todo_app.todo.store import JsonFileStore
from todo_app.views import TodoViews

log = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """组装应用；settings 不传时读取 .env / 环境变量"""
    settings = settings or get_settings()
    setup_logging(env=settings.ENV, level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        """应用生命周期：启动时载入 Store 文档（整个进程只读一次）"""
        log.info("应用启动", env=settings.ENV, app=settings.APP_NAME)
        store = JsonFileStore(settings.DB_FILE)
        application.state.todo_service = await TodoService.load(
            store, name_max_length=settings.TODO_NAME_MAX_LENGTH
        )
        yield
        log.info("应用关闭")

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.views = TodoViews(settings.TEMPLATES_DIR)

    # ── 中间件（执行顺序：从下往上注册，从上往下执行） ──
    app.add_middleware(RequestLoggerMiddleware)
    if settings.METRICS_ENABLED:
        app.add_middleware(MetricsMiddleware)
        app.mount("/metrics", make_asgi_app())

    register_exception_handlers(app)

    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")
    app.include_router(health_router)
    app.include_router(todos_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("todo_app.main:app", host=settings.APP_HOST, port=settings.APP_PORT, reload=True)
