from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from taskmanager.core.database import Base


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    status = Column(String, server_default="pending")  # pending, in-progress, completed
    priority = Column(String, server_default="medium")  # low, medium, high
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
