"""数据库连接和会话管理

Review note:
- 不再使用模块级 engine；ToolStore 由应用 lifespan 显式创建和释放，
  挂在 app.state.store 上，请求通过 get_session 依赖获取会话。
"""
from sqlalchemy import func, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator, Optional
from fastapi import Request
from pathlib import Path
import logging

logger = logging.getLogger("uvicorn.error")


def _is_memory_sqlite(database_url: str) -> bool:
    database = make_url(database_url).database
    return not database or database == ":memory:"


def _ensure_sqlite_dir(database_url: str) -> None:
    """确保 SQLite 数据库文件所在目录存在"""
    database = make_url(database_url).database
    Path(database).parent.mkdir(parents=True, exist_ok=True)


class ToolStore:
    """工具数据库句柄（引擎 + 会话工厂）"""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def _create_engine(self) -> AsyncEngine:
        if self.database_url.startswith("sqlite"):
            if _is_memory_sqlite(self.database_url):
                # 内存库只能共享同一个连接
                return create_async_engine(
                    self.database_url,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                    echo=self.echo,
                )
            _ensure_sqlite_dir(self.database_url)
            # 文件库每个会话独立连接，事务互不干扰
            return create_async_engine(
                self.database_url,
                connect_args={"check_same_thread": False},
                echo=self.echo,
            )
        return create_async_engine(self.database_url, echo=self.echo, pool_pre_ping=True)

    async def init(self) -> None:
        """创建引擎并初始化表结构"""
        from tool_directory.models.base import Base
        from tool_directory.models.tool import AiTool

        if self._engine is None:
            self._engine = self._create_engine()
            self._session_maker = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autocommit=False,
                autoflush=False,
            )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, tables=[AiTool.__table__])
        logger.info("tool-store-ready url=%s", self._engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        """关闭连接池"""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None

    def session(self) -> AsyncSession:
        if self._session_maker is None:
            raise RuntimeError("ToolStore 尚未初始化，请先调用 init()")
        return self._session_maker()

    async def count_tools(self) -> int:
        """统计当前工具数量（用于启动时判断是否需要初始数据）"""
        from tool_directory.models.tool import AiTool

        async with self.session() as session:
            result = await session.execute(select(func.count()).select_from(AiTool))
            return int(result.scalar_one())


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """获取工具数据库会话的依赖注入函数"""
    store: ToolStore = request.app.state.store
    async with store.session() as session:
        try:
            yield session
        finally:
            await session.close()
