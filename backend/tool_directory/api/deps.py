"""路由公共依赖：管理员鉴权、超时控制"""
from fastapi import Header, HTTPException, Request
from typing import Awaitable, Optional, Type, TypeVar
import asyncio
import secrets

from tool_directory.config import Settings
from tool_directory.errors import ToolDirectoryError, Unauthorized

T = TypeVar("T")

BEARER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    """获取当前应用的配置实例"""
    return request.app.state.settings


def verify_bearer_token(authorization: Optional[str], expected_token: str = "") -> str:
    """校验 Authorization 头，返回其中的 token

    expected_token 为空时只校验 Bearer 格式。
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized("Unauthorized - Bearer token required")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthorized("Unauthorized - Bearer token required")
    if expected_token and not secrets.compare_digest(token, expected_token):
        raise Unauthorized("Unauthorized - invalid admin token")
    return token


async def require_admin_token(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> str:
    """管理接口鉴权依赖，失败时返回401且不触碰数据库"""
    try:
        return verify_bearer_token(authorization, get_settings(request).ADMIN_TOKEN)
    except Unauthorized as exc:
        raise HTTPException(
            status_code=401,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def with_deadline(
    awaitable: Awaitable[T],
    timeout: float,
    error_cls: Type[ToolDirectoryError],
) -> T:
    """给数据库调用加超时，超时转换为对应的业务错误；timeout<=0 表示不限时"""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout if timeout > 0 else None)
    except asyncio.TimeoutError as exc:
        raise error_cls(f"数据库操作超时（{timeout}s）") from exc
