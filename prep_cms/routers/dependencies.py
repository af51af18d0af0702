# dependencies.py
from fastapi import Depends, Response
from sqlalchemy.orm import Session

from prep_cms.database import get_db
from prep_cms.repositories.subjects import SubjectRepository
from prep_cms.repositories.subtopics import SubtopicRepository
from prep_cms.repositories.topics import TopicRepository
from prep_cms.services.revalidation import Revalidator


REVALIDATE_HEADER = "X-Revalidate-Paths"


def get_revalidator(response: Response) -> Revalidator:
    revalidator = Revalidator()

    def _expose(_path: str) -> None:
        response.headers[REVALIDATE_HEADER] = ",".join(revalidator.paths)

    revalidator.subscribe(_expose)
    return revalidator


def get_subject_repository(
    db: Session = Depends(get_db), revalidator: Revalidator = Depends(get_revalidator)
) -> SubjectRepository:
    return SubjectRepository(db, revalidator)


def get_topic_repository(
    db: Session = Depends(get_db), revalidator: Revalidator = Depends(get_revalidator)
) -> TopicRepository:
    return TopicRepository(db, revalidator)


def get_subtopic_repository(
    db: Session = Depends(get_db), revalidator: Revalidator = Depends(get_revalidator)
) -> SubtopicRepository:
    return SubtopicRepository(db, revalidator)
