"""工具相关的Pydantic schemas

对外 JSON 字段统一使用 camelCase（imageUrl、lastSeen、hasMore 等）。
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class CamelModel(BaseModel):
    """camelCase 别名基类，同时允许按字段名赋值"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ToolInput(CamelModel):
    """精选数据集中的一条候选工具"""
    name: str = Field(..., min_length=1, description="工具名称")
    url: str = Field(..., min_length=1, description="工具主页URL")
    description: Optional[str] = Field(None, description="工具描述")
    category: Optional[str] = Field(None, description="分类")
    image_url: Optional[str] = Field(None, description="图标/Logo URL")

    @field_validator("name", "url")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("不能为空")
        return value


class ToolResponse(CamelModel):
    """工具响应"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    url: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    source: Optional[str] = None
    last_seen: Optional[datetime] = None


class PaginationInfo(CamelModel):
    """分页信息"""
    total: int
    limit: int
    offset: int
    has_more: bool


class ToolListResponse(CamelModel):
    """工具列表响应"""
    tools: list[ToolResponse]
    pagination: PaginationInfo


class RefreshResponse(CamelModel):
    """管理刷新响应"""
    success: bool
    total_processed: int
    message: str
