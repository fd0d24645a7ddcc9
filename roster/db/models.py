"""SQLAlchemy model storing blobs by key, mirroring the object store layout."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, LargeBinary, String, func

from .session import Base


class Blob(Base):
    __tablename__ = "blobs"

    key = Column(String(512), primary_key=True)
    content = Column(LargeBinary, nullable=False)
    size = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
