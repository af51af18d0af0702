from __future__ import annotations

from sqlalchemy.orm import relationship

from prep_cms.database import Base
from prep_cms.models.content import ContentMixin


class Subject(ContentMixin, Base):
    __tablename__ = "subjects"

    topics = relationship(
        "Topic",
        back_populates="subject",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
