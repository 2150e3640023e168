"""模型包初始化"""
from tool_directory.models.base import Base
from tool_directory.models.tool import AiTool

__all__ = [
    "Base",
    "AiTool",
]
