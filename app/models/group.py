"""
User-created groups
"""
from uuid import uuid4
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, JSON, Uuid
from app.database import Base
from app.utils.time_utils import utc_now


class Group(Base):
    """A named group owned by one user"""
    __tablename__ = "groups"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    members = Column(JSON, default=list, nullable=False)

    icon_url = Column(Text, nullable=True)
    icon_key = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
