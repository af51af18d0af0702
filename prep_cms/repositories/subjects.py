from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from prep_cms.errors import QueryError
from prep_cms.models.subject import Subject
from prep_cms.models.topic import Topic
from prep_cms.repositories.base import EntityRepository
from prep_cms.schemas.content import canonical_id
from prep_cms.schemas.subject import (
    SubjectCounts,
    SubjectDetail,
    SubjectForm,
    SubjectListItem,
    SubjectOut,
    TopicSummary,
)
from prep_cms.services.content_counts import get_subject_counts, subtopic_counts_by_topic, topic_counts_by_subject


logger = logging.getLogger(__name__)


class SubjectRepository(EntityRepository):
    model = Subject
    form_schema = SubjectForm
    list_item_schema = SubjectListItem
    label = "Subject"
    plural = "subjects"

    def _list_items(self, rows: list[Any]) -> list[SubjectListItem]:
        items = [SubjectListItem.model_validate(row) for row in rows]
        counts = self._best_effort(
            "topic_count",
            lambda: topic_counts_by_subject(self.db, [item.id for item in items]),
        )
        if counts is not None:
            for item in items:
                item.topic_count = counts.get(item.id, 0)
        return items

    def _live_topics(self, subject_id: str) -> list[TopicSummary]:
        rows = (
            self.db.query(Topic)
            .filter(Topic.subject_id == subject_id)
            .filter(Topic.is_deleted.is_(False))
            .order_by(Topic.name.asc())
            .all()
        )
        return [TopicSummary.model_validate(row) for row in rows]

    def _detail(self, row: Any) -> SubjectDetail:
        # Copy the scalar columns first; the ORM relationship would include deleted topics.
        detail = SubjectDetail(**SubjectOut.model_validate(row).model_dump())

        topics = self._best_effort("topics", lambda: self._live_topics(detail.id), default=[])
        if topics:
            per_topic = self._best_effort(
                "subtopics_count",
                lambda: subtopic_counts_by_topic(self.db, [t.id for t in topics]),
                default={},
            )
            for topic in topics:
                topic.subtopics_count = per_topic.get(topic.id, 0)
        detail.topics = topics

        counts = self._best_effort("counts", lambda: get_subject_counts(self.db, detail.id))
        if counts is not None:
            detail.topic_count = counts.topic_count
            detail.subtopic_count = counts.subtopic_count
        return detail

    def get_counts(self, subject_id: str) -> SubjectCounts:
        try:
            return get_subject_counts(self.db, canonical_id(subject_id))
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error fetching counts for subject %s: %s", subject_id, exc, exc_info=True)
            raise QueryError("Failed to fetch subject counts") from exc
