# navigation.py
from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from prep_cms.errors import QueryError
from prep_cms.models.subject import Subject
from prep_cms.models.subtopic import Subtopic
from prep_cms.models.topic import Topic
from prep_cms.schemas.navigation import NavSubject, NavSubtopic, NavTopic


logger = logging.getLogger(__name__)


def build_navigation(db: Session, *, include_shelved: bool = False) -> list[NavSubject]:
    """Subject -> topic -> subtopic tree for the sidebar, three queries in total.

    Soft-deleted rows never appear. Shelved rows, and everything below a shelved
    parent, are left out unless ``include_shelved`` is set.
    """

    def _visible(query, model):
        query = query.filter(model.is_deleted.is_(False))
        if not include_shelved:
            query = query.filter(model.is_shelved.is_(False))
        return query

    try:
        subjects = (
            _visible(db.query(Subject.id, Subject.name, Subject.is_shelved), Subject)
            .order_by(Subject.name.asc())
            .all()
        )
        subject_ids = [subject_id for subject_id, _name, _shelved in subjects]

        topics = []
        if subject_ids:
            topics = (
                _visible(db.query(Topic.id, Topic.name, Topic.subject_id), Topic)
                .filter(Topic.subject_id.in_(subject_ids))
                .order_by(Topic.name.asc())
                .all()
            )
        topic_ids = [topic_id for topic_id, _name, _subject_id in topics]

        subtopics = []
        if topic_ids:
            subtopics = (
                _visible(db.query(Subtopic.id, Subtopic.name, Subtopic.topic_id), Subtopic)
                .filter(Subtopic.topic_id.in_(topic_ids))
                .order_by(Subtopic.name.asc())
                .all()
            )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Error building navigation: %s", exc, exc_info=True)
        raise QueryError("Failed to load navigation") from exc

    subtopics_by_topic: dict[str, list[NavSubtopic]] = defaultdict(list)
    for subtopic_id, name, topic_id in subtopics:
        subtopics_by_topic[topic_id].append(NavSubtopic(id=subtopic_id, name=name))

    topics_by_subject: dict[str, list[NavTopic]] = defaultdict(list)
    for topic_id, name, subject_id in topics:
        topics_by_subject[subject_id].append(
            NavTopic(id=topic_id, name=name, subtopics=subtopics_by_topic.get(topic_id, []))
        )

    return [
        NavSubject(
            id=subject_id,
            name=name,
            is_shelved=bool(is_shelved),
            topics=topics_by_subject.get(subject_id, []),
        )
        for subject_id, name, is_shelved in subjects
    ]
