from __future__ import annotations

from typing import Any

from prep_cms.models.subject import Subject
from prep_cms.models.topic import Topic
from prep_cms.repositories.base import EntityRepository
from prep_cms.schemas.topic import TopicForm, TopicOption, TopicWithSubject


class TopicRepository(EntityRepository):
    model = Topic
    form_schema = TopicForm
    list_item_schema = TopicWithSubject
    label = "Topic"
    plural = "topics"

    parent_key = "subject_id"
    parent_model = Subject
    parent_label = "Subject"

    def _subject_names(self, subject_ids: set[str]) -> dict[str, str] | None:
        return self._best_effort("subject_name", lambda: self._live_names(Subject, subject_ids))

    def _list_items(self, rows: list[Any]) -> list[TopicWithSubject]:
        items = [TopicWithSubject.model_validate(row) for row in rows]
        names = self._subject_names({item.subject_id for item in items}) or {}
        for item in items:
            item.subject_name = names.get(item.subject_id)
        return items

    def _options(self, rows: list[Any]) -> list[TopicOption]:
        options = [TopicOption(id=row.id, name=row.name, subject_id=row.subject_id) for row in rows]
        names = self._subject_names({option.subject_id for option in options}) or {}
        for option in options:
            option.subject_name = names.get(option.subject_id)
        return options
