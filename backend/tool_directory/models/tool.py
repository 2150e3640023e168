"""AI工具模型"""
from sqlalchemy import Column, BigInteger, Integer, Text, DateTime, Index, func

from tool_directory.models.base import Base, utcnow


class AiTool(Base):
    """AI工具表，按小写URL唯一"""
    __tablename__ = "ai_tools"

    # SQLite 只对 INTEGER PRIMARY KEY 自增
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    category = Column(Text, nullable=True)
    source = Column(Text, nullable=True)  # 数据来源标记，例如 curated
    last_seen = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("uniq_ai_tools_url", func.lower(url), unique=True),
        Index("idx_ai_tools_category", category),
        Index("idx_ai_tools_last_seen", last_seen.desc()),
    )

    def __repr__(self):
        return f"<AiTool {self.name} {self.url}>"
