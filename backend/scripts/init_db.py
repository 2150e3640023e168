"""初始化数据库并写入精选工具数据"""
import asyncio
import sys
from pathlib import Path

# 添加项目根目录到Python路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from tool_directory.config import settings
from tool_directory.crud.tool import tool_crud
from tool_directory.database import ToolStore
from tool_directory.services.catalog import load_curated_tools


async def init_curated_data() -> int:
    """建表并整批 upsert 精选数据集，返回处理条数"""
    store = ToolStore(settings.DATABASE_URL, echo=settings.DEBUG)
    await store.init()
    try:
        catalog = load_curated_tools(settings.CURATED_TOOLS_FILE)
        print(f"📝 读取精选数据集：{len(catalog)} 条")

        async with store.session() as session:
            processed = await tool_crud.bulk_upsert(session, catalog)

        total = await store.count_tools()
        print("✅ 精选数据写入成功！")
        print(f"   - 处理了 {processed} 个工具")
        print(f"   - 当前共有 {total} 个工具")
        return processed
    finally:
        await store.dispose()


if __name__ == "__main__":
    print("=" * 60)
    print("🚀 AI工具目录 - 数据库初始化")
    print("=" * 60)

    asyncio.run(init_curated_data())

    print("\n✨ 初始化完成！现在可以启动服务了。")
    print("   运行命令: uvicorn tool_directory.main:app --reload --port 8000")
    print("=" * 60)
