from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class StoredDocument(Base):
    """One document of a named collection, kept as a JSON blob."""

    __tablename__ = "documents"

    collection = Column(String(100), primary_key=True)
    doc_id = Column(String(200), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
