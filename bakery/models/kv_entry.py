"""Key-value row used by the SQL store backend."""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from bakery.database import Base


class KVEntry(Base):
    """One JSON document per store key."""

    __tablename__ = 'kv_entry'

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<KVEntry(key='{self.key}')>"
