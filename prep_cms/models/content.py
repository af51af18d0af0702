from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Text


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentMixin:
    """Columns shared by every level of the subject/topic/subtopic tree.

    ``is_deleted`` hides a row from every read, ``is_shelved`` hides it from
    default listings only, ``is_active`` is end-user visibility and is never
    filtered implicitly.
    """

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_shelved = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    # Written by the repositories on every update, not by a database trigger.
    modified_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
