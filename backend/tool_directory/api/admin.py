"""管理API：一键刷新精选工具数据"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from tool_directory.database import get_session
from tool_directory.crud.tool import tool_crud
from tool_directory.errors import RefreshFailed
from tool_directory.schemas.tool import RefreshResponse
from tool_directory.api.deps import get_settings, require_admin_token, with_deadline

logger = logging.getLogger("uvicorn.error")

router = APIRouter()


@router.post(
    "/admin/refresh",
    response_model=RefreshResponse,
    dependencies=[Depends(require_admin_token)],
)
async def refresh_tools(request: Request, db: AsyncSession = Depends(get_session)):
    """把精选数据集整批 upsert 到工具表"""
    settings = get_settings(request)
    catalog = request.app.state.catalog
    logger.info("admin-refresh-start candidates=%s", len(catalog))

    try:
        processed = await with_deadline(
            tool_crud.bulk_upsert(db, catalog),
            settings.STORE_TIMEOUT_SEC,
            RefreshFailed,
        )
    except RefreshFailed as exc:
        logger.error("admin-refresh-failed reason=%s", exc.message)
        return JSONResponse(
            status_code=500,
            content=RefreshResponse(
                success=False,
                total_processed=0,
                message="Refresh failed",
            ).model_dump(by_alias=True),
        )

    logger.info("admin-refresh-done processed=%s", processed)
    return RefreshResponse(
        success=True,
        total_processed=processed,
        message=f"One-click refresh complete: {processed} AI tools updated",
    )
