"""
Filter Engine：纯函数，按 filter key 划分 Todo 子集并统计各子集数量

TodoFilter 为显式枚举，谓词映射覆盖所有成员；未识别的 key 在 parse 阶段直接拒绝。
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from todo_app.todo.errors import InvalidFilterError
from todo_app.todo.schemas import Todo


class TodoFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: str | None) -> "TodoFilter":
        """None / 空串 → ALL；大小写不敏感；未知 key 抛 InvalidFilterError"""
        if value is None or not value.strip():
            return cls.ALL
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidFilterError(value) from None

    @property
    def label(self) -> str:
        return _LABELS[self]

    def matches(self, todo: Todo) -> bool:
        return _PREDICATES[self](todo)


_PREDICATES: dict[TodoFilter, Callable[[Todo], bool]] = {
    TodoFilter.ALL: lambda todo: True,
    TodoFilter.ACTIVE: lambda todo: not todo.completed,
    TodoFilter.COMPLETED: lambda todo: todo.completed,
}

_LABELS: dict[TodoFilter, str] = {
    TodoFilter.ALL: "All",
    TodoFilter.ACTIVE: "Active",
    TodoFilter.COMPLETED: "Completed",
}


@dataclass(frozen=True)
class FilterOption:
    """筛选控件中的一项"""

    key: str
    label: str
    count: int
    selected: bool


def apply_filter(todos: Iterable[Todo], todo_filter: TodoFilter) -> list[Todo]:
    """按谓词过滤，保持原顺序"""
    return [todo for todo in todos if todo_filter.matches(todo)]


def count_todos(todos: Iterable[Todo]) -> dict[TodoFilter, int]:
    """每个 key 都针对完整列表独立计数（不是累计，也不是基于已过滤子集）"""
    todos = list(todos)
    return {f: sum(1 for todo in todos if f.matches(todo)) for f in TodoFilter}


def filter_options(todos: Iterable[Todo], current: TodoFilter) -> list[FilterOption]:
    counts = count_todos(todos)
    return [
        FilterOption(key=f.value, label=f.label, count=counts[f], selected=f is current)
        for f in TodoFilter
    ]
