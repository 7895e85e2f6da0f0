"""
JSON document table backing every per-user collection
"""
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, String

from core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentRecord(Base):
    """One JSON document, addressed by (collection, doc_id)"""
    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    doc_id = Column(String(255), primary_key=True)
    user_id = Column(String(128), nullable=True)
    data = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("ix_documents_collection_user", "collection", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<DocumentRecord {self.collection}/{self.doc_id} user={self.user_id}>"
