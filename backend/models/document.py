from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON, Index

from core.database import Base
from core.ids import generate_object_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(Base):
    """Validated object stored under a hex object id"""
    __tablename__ = "documents"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    collection = Column(String(100), nullable=False)  # Schema name the body was validated against
    body = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("ix_documents_collection", "collection"),
    )

    def to_dict(self) -> dict:
        return {"id": self.id, **(self.body or {})}
