# app/models/formation.py
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from app.core.database import Base
from app.utils.timeutils import get_utc_now


class Formation(Base):
    __tablename__ = "formations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=get_utc_now, nullable=False)

    def __repr__(self):
        return f"<Formation(id={self.id}, title={self.title})>"


class Chapter(Base):
    __tablename__ = "chapters"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    formation_id = Column(
        String(36),
        ForeignKey("formations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    position = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Chapter(id={self.id}, formation_id={self.formation_id})>"


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    chapter_id = Column(
        String(36),
        ForeignKey("chapters.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title = Column(String(255), nullable=False)
    position = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Lesson(id={self.id}, title={self.title})>"
