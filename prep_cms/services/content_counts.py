# content_counts.py
from __future__ import annotations

from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from prep_cms.models.subtopic import Subtopic
from prep_cms.models.topic import Topic
from prep_cms.schemas.subject import SubjectCounts


def _unique(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(i for i in ids if i))


def live_topic_ids(db: Session, subject_id: str) -> list[str]:
    rows = (
        db.query(Topic.id)
        .filter(Topic.subject_id == subject_id)
        .filter(Topic.is_deleted.is_(False))
        .all()
    )
    return [topic_id for (topic_id,) in rows]


def get_subject_counts(db: Session, subject_id: str) -> SubjectCounts:
    """Live topic and subtopic totals for one subject.

    Subtopics are counted against the subject's live topic ids; with no live
    topics the second query is never issued.
    """

    topic_ids = live_topic_ids(db, subject_id)
    if not topic_ids:
        return SubjectCounts(topic_count=0, subtopic_count=0)

    subtopic_count = (
        db.query(func.count(Subtopic.id))
        .filter(Subtopic.topic_id.in_(topic_ids))
        .filter(Subtopic.is_deleted.is_(False))
        .scalar()
    )
    return SubjectCounts(topic_count=len(topic_ids), subtopic_count=int(subtopic_count or 0))


def topic_counts_by_subject(db: Session, subject_ids: Iterable[str]) -> dict[str, int]:
    ids = _unique(subject_ids)
    if not ids:
        return {}

    rows = (
        db.query(Topic.subject_id, func.count(Topic.id))
        .filter(Topic.subject_id.in_(ids))
        .filter(Topic.is_deleted.is_(False))
        .group_by(Topic.subject_id)
        .all()
    )
    counts = {subject_id: 0 for subject_id in ids}
    for subject_id, c in rows:
        counts[subject_id] = int(c or 0)
    return counts


def subtopic_counts_by_topic(db: Session, topic_ids: Iterable[str]) -> dict[str, int]:
    ids = _unique(topic_ids)
    if not ids:
        return {}

    rows = (
        db.query(Subtopic.topic_id, func.count(Subtopic.id))
        .filter(Subtopic.topic_id.in_(ids))
        .filter(Subtopic.is_deleted.is_(False))
        .group_by(Subtopic.topic_id)
        .all()
    )
    counts = {topic_id: 0 for topic_id in ids}
    for topic_id, c in rows:
        counts[topic_id] = int(c or 0)
    return counts
