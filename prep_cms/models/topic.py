from __future__ import annotations

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from prep_cms.database import Base
from prep_cms.models.content import ContentMixin


class Topic(ContentMixin, Base):
    __tablename__ = "topics"

    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)

    subject = relationship("Subject", back_populates="topics")
    subtopics = relationship(
        "Subtopic",
        back_populates="topic",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
