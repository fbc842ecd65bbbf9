"""
请求日志中间件：记录每个 HTTP 请求的开始/结束 + trace_id 注入

htmx 发起的局部刷新请求额外记录目标元素与触发元素，便于区分整页加载和片段交换。
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

log = structlog.get_logger()


def _htmx_fields(request: Request) -> dict:
    """HX-* 请求头 → 日志字段；非 htmx 请求只记 fragment=False"""
    if request.headers.get("HX-Request") != "true":
        return {"fragment": False}
    return {
        "fragment": True,
        "hx_target": request.headers.get("HX-Target"),
        "hx_trigger": request.headers.get("HX-Trigger"),
    }


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """HTTP 请求日志 + trace_id 上下文注入"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())

        # 绑定到 structlog 上下文，后续 handler / service 日志自动带 trace_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(trace_id=trace_id)

        start = time.monotonic()

        log.info(
            "请求开始",
            method=request.method,
            path=request.url.path,
            filter=request.query_params.get("filter"),
            client_ip=request.client.host if request.client else "unknown",
            **_htmx_fields(request),
        )

        response = await call_next(request)

        duration_ms = int((time.monotonic() - start) * 1000)

        log.info(
            "请求结束",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        response.headers["X-Trace-ID"] = trace_id
        response.headers["X-Duration-Ms"] = str(duration_ms)

        return response
