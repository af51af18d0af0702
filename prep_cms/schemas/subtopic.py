from __future__ import annotations

from pydantic import field_validator

from prep_cms.schemas.common import OptionItem
from prep_cms.schemas.content import ContentForm, ContentOut, normalize_uuid


# ------------------ Subtopic Schemas ------------------

class SubtopicForm(ContentForm):
    topic_id: str

    @field_validator("topic_id", mode="before")
    @classmethod
    def _validate_topic_id(cls, v) -> str:
        return normalize_uuid(v, label="Topic ID")


class SubtopicOut(ContentOut):
    topic_id: str


class SubtopicWithParents(SubtopicOut):
    topic_name: str | None = None
    subject_id: str | None = None
    subject_name: str | None = None


class SubtopicOption(OptionItem):
    topic_id: str
