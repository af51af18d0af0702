from __future__ import annotations

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from prep_cms.database import Base
from prep_cms.models.content import ContentMixin


class Subtopic(ContentMixin, Base):
    __tablename__ = "sub_topics"

    topic_id = Column(String(36), ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True)

    topic = relationship("Topic", back_populates="subtopics")
