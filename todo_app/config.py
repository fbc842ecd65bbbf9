"""
全局配置模块：通过 pydantic-settings 读取 .env 环境变量
"""

from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """应用全局配置，从 .env 文件加载"""

    model_config = SettingsConfigDict(
        env_file=PACKAGE_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── 存储 ──
    DB_FILE: str = "db.json"  # Store Document 路径（相对路径按工作目录解析）

    # ── Todo 行为 ──
    TODO_CREATE_DELAY_SECONDS: float = 0.0  # 新建后的人为延迟，演示 loading 指示器时可设为 2
    TODO_NAME_MAX_LENGTH: int = 200

    # ── 视图 ──
    TEMPLATES_DIR: str = str(PACKAGE_DIR / "templates")
    STATIC_DIR: str = str(PACKAGE_DIR / "static")

    # ── 可观测性 ──
    LOG_LEVEL: str = "INFO"
    METRICS_ENABLED: bool = True

    # ── 应用 ──
    ENV: str = "development"  # development | production
    APP_NAME: str = "todo-app"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 3000

    @model_validator(mode="after")
    def _check_limits(self) -> "Settings":
        """启动时校验数值配置，避免运行期才暴露"""
        if self.TODO_CREATE_DELAY_SECONDS < 0:
            raise ValueError("TODO_CREATE_DELAY_SECONDS 不能为负数")
        if self.TODO_NAME_MAX_LENGTH < 1:
            raise ValueError("TODO_NAME_MAX_LENGTH 必须 >= 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """单例获取配置（带缓存）"""
    return Settings()
