"""目录服务的错误类型"""


class ToolDirectoryError(Exception):
    """所有目录服务错误的基类"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class StoreUnavailable(ToolDirectoryError):
    """数据库不可达或查询失败"""


class RefreshFailed(ToolDirectoryError):
    """批量 upsert 事务未能完成，未提交任何数据"""


class Unauthorized(ToolDirectoryError):
    """管理接口缺少有效的 Bearer 凭证"""
