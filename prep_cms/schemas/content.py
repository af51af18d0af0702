from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator


NAME_MIN_LENGTH = 2
# Matches the String(100) name column.
NAME_MAX_LENGTH = 100
SUBJECT_DESCRIPTION_MAX_LENGTH = 500


def canonical_id(value: str) -> str:
    """Lowercase hyphenated form of a UUID; other strings come back stripped."""
    raw = str(value or "").strip()
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        return raw


def normalize_uuid(value, *, label: str) -> str:
    raw = str(value or "").strip()
    if not raw:
        raise ValueError(f"{label} is required.")
    try:
        return str(uuid.UUID(raw))
    except ValueError as exc:
        raise ValueError(f"{label} must be a valid identifier.") from exc


class ContentForm(BaseModel):
    """Writable fields shared by subjects, topics and subtopics.

    ``description_max_length`` is ``None`` where descriptions are unbounded.
    """

    model_config = ConfigDict(extra="forbid")

    description_max_length: ClassVar[int | None] = None

    name: str
    description: str | None = None
    is_active: bool = True
    is_shelved: bool = False

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        value = (v or "").strip()
        if len(value) < NAME_MIN_LENGTH:
            raise ValueError(f"Name must be at least {NAME_MIN_LENGTH} characters.")
        if len(value) > NAME_MAX_LENGTH:
            raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters.")
        return value

    @field_validator("description")
    @classmethod
    def _validate_description(cls, v: str | None) -> str | None:
        if v is None:
            return None
        value = v.strip()
        if not value:
            return None
        limit = cls.description_max_length
        if limit is not None and len(value) > limit:
            raise ValueError(f"Description must be at most {limit} characters.")
        return value


class ContentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    is_active: bool
    is_shelved: bool
    is_deleted: bool
    created_at: datetime
    modified_at: datetime
