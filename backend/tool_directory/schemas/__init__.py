"""Schemas包初始化"""
from tool_directory.schemas.tool import (
    ToolInput,
    ToolResponse,
    PaginationInfo,
    ToolListResponse,
    RefreshResponse,
)

__all__ = [
    "ToolInput",
    "ToolResponse",
    "PaginationInfo",
    "ToolListResponse",
    "RefreshResponse",
]
