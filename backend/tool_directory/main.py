"""FastAPI应用主文件.

Review note:
- 数据库句柄和精选数据集都在 lifespan 中创建，挂在 app.state 上，
  测试可以通过 create_app(Settings(...)) 注入独立配置。
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

from tool_directory.config import Settings, settings as default_settings
from tool_directory.crud.tool import tool_crud
from tool_directory.database import ToolStore
from tool_directory.errors import RefreshFailed
from tool_directory.services.catalog import load_curated_tools

logger = logging.getLogger("uvicorn.error")


async def seed_if_empty(store: ToolStore, catalog, limit: int) -> int:
    """表为空时写入前 limit 条精选数据，返回写入条数"""
    try:
        existing = await store.count_tools()
    except SQLAlchemyError as exc:
        logger.error("seed-count-failed reason=%s", exc)
        return 0
    if existing > 0:
        return 0
    async with store.session() as session:
        try:
            processed = await tool_crud.bulk_upsert(session, catalog[:limit])
        except RefreshFailed as exc:
            # 初始数据失败不影响服务启动
            logger.error("seed-failed reason=%s", exc.message)
            return 0
    logger.info("seed-done processed=%s", processed)
    return processed


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """创建FastAPI应用"""
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期管理"""
        # 启动时执行
        logger.info("启动AI工具目录后端...")

        store = ToolStore(app_settings.DATABASE_URL, echo=app_settings.DEBUG)
        await store.init()
        app.state.store = store
        app.state.catalog = load_curated_tools(app_settings.CURATED_TOOLS_FILE)

        if app_settings.SEED_ON_STARTUP:
            await seed_if_empty(store, app.state.catalog, app_settings.SEED_LIMIT)

        logger.info("数据库初始化完成")

        yield

        # 关闭时执行
        await store.dispose()
        logger.info("关闭AI工具目录后端...")

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        description="AI工具目录后端API",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """根路径"""
        return {
            "message": "欢迎使用AI工具目录API",
            "version": app_settings.APP_VERSION,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """健康检查"""
        return {
            "status": "healthy",
            "service": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION
        }

    # 导入并注册路由
    from tool_directory.api import tools, admin
    app.include_router(tools.router, prefix="/api", tags=["tools"])
    app.include_router(admin.router, prefix="/api", tags=["admin"])

    return app


# 创建FastAPI应用
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "tool_directory.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
