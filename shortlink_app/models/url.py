from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from shortlink_app.database.connection import Base


class UrlRecord(Base):
    """
    Persisted code -> URL mapping.
    
    Rows are inserted once and never updated. The primary key on
    `code` is what makes a colliding insert fail atomically.
    """
    __tablename__ = "url_mappings"

    code = Column(String(32), primary_key=True)
    target_url = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
