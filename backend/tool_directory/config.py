"""应用配置"""
from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    """应用配置类"""

    # 应用信息
    APP_NAME: str = "AI Tool Directory"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 数据库配置
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/ai_tools.db"
    STORE_TIMEOUT_SEC: float = 10.0

    # CORS配置
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # 管理接口：为空时只校验 Bearer 格式
    ADMIN_TOKEN: str = ""

    # 精选工具数据集
    CURATED_TOOLS_FILE: str = str(Path(__file__).resolve().parent / "data" / "curated_tools.json")
    SEED_ON_STARTUP: bool = True
    SEED_LIMIT: int = 50

    # 分页
    DEFAULT_PAGE_SIZE: int = 24
    MAX_PAGE_SIZE: int = 48

    @model_validator(mode="before")
    @classmethod
    def treat_empty_env_as_unset(cls, data):
        """
        将空字符串环境变量按“未配置”处理。
        这样 .env 中留空不会覆盖默认值，也避免复杂类型解析报错。
        """
        if not isinstance(data, dict):
            return data

        cleaned = dict(data)
        for field_name, field in cls.model_fields.items():
            default = field.default

            # 仅当字段本身有可用默认值时，空字符串才回退到默认值
            if default in (None, ""):
                continue

            if cleaned.get(field_name) == "":
                cleaned.pop(field_name, None)

        return cleaned

    @property
    def cors_origins_list(self) -> List[str]:
        """获取CORS允许的源列表"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = (".env", "backend/.env")
        case_sensitive = True
        extra = "ignore"


# 全局配置实例
settings = Settings()
