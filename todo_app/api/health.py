"""
健康检查接口：探活 + Store 状态
"""

import os

import structlog
from fastapi import APIRouter, Depends

from todo_app.api.deps import get_todo_service
from todo_app.todo.service import TodoService

router = APIRouter(tags=["健康检查"])
log = structlog.get_logger()


@router.get("/health")
async def health_check(service: TodoService = Depends(get_todo_service)):
    """健康检查：Store 所在目录是否可写"""
    status = {
        "status": "ok",
        "todos": len(service.todos),
        "store": str(service.store.path),
    }

    # 目录尚不存在时首次 save 会自动创建，不算异常
    parent = service.store.path.resolve().parent
    if parent.exists() and not os.access(parent, os.W_OK):
        status["status"] = "degraded"
        log.error("Store 目录不可写", path=str(parent))

    return status
