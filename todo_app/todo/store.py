"""
Todo JSON 文件存储层

单文件单写者：整个 StoreDocument 读入内存，每次变更后整体覆盖写回。
文件读写放到 worker 线程，不阻塞事件循环。

容错策略：
- load() 失败时（文件不存在 / 不可读 / JSON 损坏 / 结构不合法）：记录警告并返回空文档
- save() 失败时：抛出 PersistenceError，由调用方决定回滚
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path

import structlog
from pydantic import ValidationError

from todo_app.todo.errors import PersistenceError
from todo_app.todo.schemas import StoreDocument

log = structlog.get_logger()


def serialize(document: StoreDocument) -> str:
    """稳定序列化：字段顺序固定、2 空格缩进，save(load()) 得到相同字节"""
    return json.dumps(document.model_dump(mode="json"), ensure_ascii=False, indent=2)


class JsonFileStore:
    """StoreDocument 的 JSON 文件读写"""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    async def load(self) -> StoreDocument:
        """读取文档，不存在或不可用时返回默认空文档"""
        try:
            raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except FileNotFoundError:
            log.info("Store 文件不存在，使用空文档", path=str(self.path))
            return StoreDocument()
        except (OSError, UnicodeDecodeError) as e:
            # 非 UTF-8 字节同样视为不可读
            log.warning("Store 文件不可读，使用空文档", path=str(self.path), error=str(e))
            return StoreDocument()

        try:
            return StoreDocument.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            log.warning("Store 文件内容不合法，使用空文档", path=str(self.path), error=str(e))
            return StoreDocument()

    async def save(self, document: StoreDocument) -> None:
        """整体覆盖写入；写入串行化，任何 IO 错误统一转为 PersistenceError"""
        payload = serialize(document)
        async with self._write_lock:
            try:
                await asyncio.to_thread(self._write_atomic, payload)
            except OSError as e:
                log.error("Store 写入失败", path=str(self.path), error=str(e))
                raise PersistenceError(cause=e) from e

    def _write_atomic(self, payload: str) -> None:
        # 先写同目录临时文件再 replace，崩溃时不会留下半截 JSON
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
