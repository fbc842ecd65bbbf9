"""
Todo 领域异常

每个异常自带 HTTP 状态码与纯文本响应体，由 api/errors.py 在传输边界统一翻译，
handler 内部只抛领域异常，不直接拼 Response。
"""


class TodoError(Exception):
    """Todo 领域异常基类"""

    status_code: int = 500
    error_type: str = "unknown"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class TodoNotFoundError(TodoError):
    """id 不对应任何 Todo"""

    status_code = 404
    error_type = "not_found"

    def __init__(self, todo_id: str):
        super().__init__("Todo not found")
        self.todo_id = todo_id


class InvalidFilterError(TodoError):
    """未识别的 filter key"""

    status_code = 400
    error_type = "invalid_filter"

    def __init__(self, key: str):
        super().__init__(f"Unknown filter: {key}")
        self.key = key


class TodoValidationError(TodoError):
    """Todo 名称为空或超长"""

    status_code = 422
    error_type = "validation"


class PersistenceError(TodoError):
    """Store 读写失败（不区分部分写入与完全失败）"""

    status_code = 500
    error_type = "persistence"

    def __init__(self, message: str = "Failed to save todos", cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause
