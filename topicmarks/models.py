from sqlalchemy import Column, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid
from .db import Base


DEFAULT_EMOJI = "📁"


def generate_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Topic(Base):
    __tablename__ = "topics"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    emoji = Column(String(32), nullable=True, default=DEFAULT_EMOJI)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    # rows are removed by the foreign key's ON DELETE CASCADE, not by the ORM
    bookmarks = relationship(
        "Bookmark", back_populates="topic", cascade="all, delete-orphan", passive_deletes=True
    )


class Bookmark(Base):
    __tablename__ = "bookmarks"

    id = Column(String(36), primary_key=True, default=generate_id)
    url = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    topic_id = Column(
        String(36), ForeignKey("topics.id", ondelete="CASCADE"), index=True, nullable=False
    )
    topic = relationship("Topic", back_populates="bookmarks")
