"""AI工具的查询与批量 upsert 操作"""
from dataclasses import dataclass, field
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func, or_
from typing import Optional, List, Sequence, Tuple
import logging

from tool_directory.errors import StoreUnavailable, RefreshFailed
from tool_directory.models.base import utcnow
from tool_directory.models.tool import AiTool
from tool_directory.schemas.tool import ToolInput

logger = logging.getLogger("uvicorn.error")

DEFAULT_LIMIT = 24
MAX_LIMIT = 48
ALL_CATEGORIES = "all"


@dataclass
class ToolPage:
    """一页查询结果"""
    tools: List[AiTool] = field(default_factory=list)
    total: int = 0
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total


def clamp_pagination(
    limit: Optional[int],
    offset: Optional[int],
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> Tuple[int, int]:
    """把 limit 限制在 [1, max_limit]，offset 不小于 0；越界值静默修正"""
    if limit is None:
        limit = default_limit
    limit = min(max(limit, 1), max_limit)
    offset = max(offset or 0, 0)
    return limit, offset


def _tool_filters(search: Optional[str], category: Optional[str]) -> list:
    conditions = []
    search = (search or "").strip()
    if search:
        # autoescape: 搜索词中的 % 和 _ 按字面匹配
        conditions.append(
            or_(
                AiTool.name.icontains(search, autoescape=True),
                AiTool.description.icontains(search, autoescape=True),
            )
        )
    if category and category != ALL_CATEGORIES:
        conditions.append(AiTool.category == category)
    return conditions


class CRUDTool:
    """工具查询与 upsert 操作"""

    async def get_by_url(self, db: AsyncSession, url: str) -> Optional[AiTool]:
        """按规范化（小写）URL 获取工具"""
        result = await db.execute(
            select(AiTool).where(func.lower(AiTool.url) == func.lower(url))
        )
        return result.scalar_one_or_none()

    async def list_tools(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> ToolPage:
        """按搜索词/分类筛选并分页，按 last_seen、id 倒序"""
        limit, offset = clamp_pagination(limit, offset, default_limit, max_limit)
        conditions = _tool_filters(search, category)

        count_query = select(func.count()).select_from(AiTool)
        query = select(AiTool)
        if conditions:
            count_query = count_query.where(*conditions)
            query = query.where(*conditions)
        query = (
            query.order_by(AiTool.last_seen.desc(), AiTool.id.desc())
            .limit(limit)
            .offset(offset)
        )

        try:
            total = (await db.execute(count_query)).scalar_one()
            result = await db.execute(query)
            tools = list(result.scalars().all())
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailable(f"查询工具失败: {exc}") from exc

        return ToolPage(tools=tools, total=int(total), limit=limit, offset=offset)

    async def list_categories(self, db: AsyncSession) -> List[str]:
        """获取所有非空分类（去重，升序）"""
        query = (
            select(AiTool.category)
            .where(AiTool.category.is_not(None), AiTool.category != "")
            .distinct()
            .order_by(AiTool.category)
        )
        try:
            result = await db.execute(query)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailable(f"查询分类失败: {exc}") from exc
        return list(result.scalars().all())

    async def bulk_upsert(
        self,
        db: AsyncSession,
        candidates: Sequence[ToolInput],
        source: str = "curated",
    ) -> int:
        """在单个事务中按小写URL插入或更新候选工具，返回处理条数

        任一步失败则整批回滚并抛出 RefreshFailed，不保留部分结果。
        """
        processed = 0
        try:
            for candidate in candidates:
                now = utcnow()
                existing = await self.get_by_url(db, candidate.url)
                if existing:
                    existing.name = candidate.name
                    existing.description = candidate.description
                    existing.image_url = candidate.image_url
                    existing.category = candidate.category
                    existing.last_seen = now
                else:
                    db.add(AiTool(
                        name=candidate.name,
                        url=candidate.url,
                        description=candidate.description,
                        image_url=candidate.image_url,
                        category=candidate.category,
                        source=source,
                        last_seen=now,
                    ))
                # 立即 flush，同一批次内重复的URL才能被后续查询看到
                await db.flush()
                processed += 1

            await db.commit()
        except Exception as exc:
            await db.rollback()
            logger.exception("bulk-upsert-failed processed_before_rollback=%s", processed)
            raise RefreshFailed(f"批量更新失败: {exc}") from exc

        logger.info("bulk-upsert-done processed=%s source=%s", processed, source)
        return processed


# 创建实例
tool_crud = CRUDTool()
