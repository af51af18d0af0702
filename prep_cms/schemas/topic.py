from __future__ import annotations

from pydantic import field_validator

from prep_cms.schemas.common import OptionItem
from prep_cms.schemas.content import ContentForm, ContentOut, normalize_uuid


# ------------------ Topic Schemas ------------------

class TopicForm(ContentForm):
    subject_id: str

    @field_validator("subject_id", mode="before")
    @classmethod
    def _validate_subject_id(cls, v) -> str:
        return normalize_uuid(v, label="Subject ID")


class TopicOut(ContentOut):
    subject_id: str


class TopicWithSubject(TopicOut):
    subject_name: str | None = None


class TopicOption(OptionItem):
    subject_id: str
    subject_name: str | None = None
