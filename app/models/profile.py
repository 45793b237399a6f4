# app/models/profile.py
from sqlalchemy import Column, String

from app.core.database import Base


class Profile(Base):
    """Public profile of an identity-provider user; ``id`` is the provider's user id."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    username = Column(String(100), nullable=True)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    role = Column(String(20), default="user", nullable=False)  # user, admin

    def __repr__(self):
        return f"<Profile(id={self.id}, role={self.role})>"
