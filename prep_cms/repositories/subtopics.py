from __future__ import annotations

from typing import Any

from prep_cms.models.subject import Subject
from prep_cms.models.subtopic import Subtopic
from prep_cms.models.topic import Topic
from prep_cms.repositories.base import EntityRepository
from prep_cms.schemas.subtopic import SubtopicForm, SubtopicOption, SubtopicWithParents


class SubtopicRepository(EntityRepository):
    model = Subtopic
    form_schema = SubtopicForm
    list_item_schema = SubtopicWithParents
    label = "Subtopic"
    plural = "subtopics"

    parent_key = "topic_id"
    parent_model = Topic
    parent_label = "Topic"

    def _parents(self, topic_ids: set[str]) -> dict[str, tuple[str, str, str | None]]:
        """topic id -> (topic name, subject id, subject name), two queries in total."""
        topic_ids = {i for i in topic_ids if i}
        if not topic_ids:
            return {}
        topics = (
            self.db.query(Topic.id, Topic.name, Topic.subject_id)
            .filter(Topic.id.in_(topic_ids))
            .filter(Topic.is_deleted.is_(False))
            .all()
        )
        subject_names = self._live_names(Subject, {subject_id for _id, _name, subject_id in topics})
        return {
            topic_id: (name, subject_id, subject_names.get(subject_id))
            for topic_id, name, subject_id in topics
        }

    def _list_items(self, rows: list[Any]) -> list[SubtopicWithParents]:
        items = [SubtopicWithParents.model_validate(row) for row in rows]
        parents = self._best_effort("parents", lambda: self._parents({item.topic_id for item in items})) or {}
        for item in items:
            parent = parents.get(item.topic_id)
            if parent is not None:
                item.topic_name, item.subject_id, item.subject_name = parent
        return items

    def _options(self, rows: list[Any]) -> list[SubtopicOption]:
        return [SubtopicOption(id=row.id, name=row.name, topic_id=row.topic_id) for row in rows]
