from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from prep_cms.schemas.content import SUBJECT_DESCRIPTION_MAX_LENGTH, ContentForm, ContentOut


# ------------------ Subject Schemas ------------------

class SubjectForm(ContentForm):
    description_max_length = SUBJECT_DESCRIPTION_MAX_LENGTH


class SubjectOut(ContentOut):
    pass


class SubjectListItem(SubjectOut):
    topic_count: int | None = None


class TopicSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    is_active: bool
    is_shelved: bool
    subtopics_count: int = 0


class SubjectDetail(SubjectOut):
    topics: list[TopicSummary] = []
    topic_count: int | None = None
    subtopic_count: int | None = None


class SubjectCounts(BaseModel):
    topic_count: int
    subtopic_count: int
