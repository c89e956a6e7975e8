"""
User model. Accounts are owned by the auth service; the social core only reads them.
"""
from uuid import uuid4
from sqlalchemy import Column, String, Boolean, DateTime, Text, Uuid
from app.database import Base
from app.utils.time_utils import utc_now


class User(Base):
    """User account model"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    email = Column(String(255), unique=True, nullable=True, index=True)
    username = Column(String(30), unique=True, nullable=True, index=True)
    display_name = Column(String(255), nullable=True)
    photo_url = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"<User {self.id} {self.username!r}>"
