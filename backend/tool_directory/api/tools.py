"""工具列表与分类查询API"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from tool_directory.database import get_session
from tool_directory.crud.tool import tool_crud, clamp_pagination
from tool_directory.errors import StoreUnavailable
from tool_directory.schemas.tool import ToolListResponse, ToolResponse, PaginationInfo
from tool_directory.api.deps import get_settings, with_deadline

logger = logging.getLogger("uvicorn.error")

router = APIRouter()


def _parse_int(value: Optional[str]) -> Optional[int]:
    """宽松解析整数参数，无法解析时返回 None（使用默认值）"""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


@router.get("/tools", response_model=ToolListResponse)
async def get_tools(
    request: Request,
    search: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    db: AsyncSession = Depends(get_session),
):
    """获取工具列表（搜索、分类筛选、分页）"""
    settings = get_settings(request)
    page_limit, page_offset = clamp_pagination(
        _parse_int(limit),
        _parse_int(offset),
        settings.DEFAULT_PAGE_SIZE,
        settings.MAX_PAGE_SIZE,
    )

    try:
        page = await with_deadline(
            tool_crud.list_tools(
                db,
                search=search,
                category=category,
                limit=page_limit,
                offset=page_offset,
                default_limit=settings.DEFAULT_PAGE_SIZE,
                max_limit=settings.MAX_PAGE_SIZE,
            ),
            settings.STORE_TIMEOUT_SEC,
            StoreUnavailable,
        )
    except StoreUnavailable as exc:
        logger.error("list-tools-failed reason=%s", exc.message)
        # 降级：返回空结果并带错误标记
        return JSONResponse(
            status_code=503,
            content={
                "tools": [],
                "pagination": PaginationInfo(
                    total=0, limit=page_limit, offset=page_offset, has_more=False
                ).model_dump(by_alias=True),
                "error": "Failed to fetch tools",
            },
        )

    return ToolListResponse(
        tools=[ToolResponse.model_validate(tool) for tool in page.tools],
        pagination=PaginationInfo(
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            has_more=page.has_more,
        ),
    )


@router.get("/categories", response_model=List[str])
async def get_categories(request: Request, db: AsyncSession = Depends(get_session)):
    """获取所有分类（升序）"""
    settings = get_settings(request)
    try:
        return await with_deadline(
            tool_crud.list_categories(db),
            settings.STORE_TIMEOUT_SEC,
            StoreUnavailable,
        )
    except StoreUnavailable as exc:
        logger.error("list-categories-failed reason=%s", exc.message)
        return JSONResponse(status_code=503, content={"error": "Failed to fetch categories"})
