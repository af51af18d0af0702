from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from prep_cms.repositories.base import EntityRepository
from prep_cms.repositories.subjects import SubjectRepository
from prep_cms.repositories.subtopics import SubtopicRepository
from prep_cms.repositories.topics import TopicRepository
from prep_cms.routers.dependencies import get_subject_repository, get_subtopic_repository, get_topic_repository
from prep_cms.schemas.common import SuccessResponse


router = APIRouter(prefix="/admin", tags=["admin"])

logger = logging.getLogger(__name__)


def _hard_delete(repo: EntityRepository, entity_id: str, confirm: bool) -> SuccessResponse:
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Permanent delete requires confirm=true",
        )
    logger.info("admin.hard_delete %s id=%s", repo.label.lower(), entity_id)
    repo.hard_delete(entity_id)
    return SuccessResponse()


@router.delete("/subjects/{subject_id}", response_model=SuccessResponse)
def hard_delete_subject(
    subject_id: str,
    confirm: bool = Query(default=False, description="Must be true; permanent deletes cannot be undone"),
    repo: SubjectRepository = Depends(get_subject_repository),
):
    return _hard_delete(repo, subject_id, confirm)


@router.delete("/topics/{topic_id}", response_model=SuccessResponse)
def hard_delete_topic(
    topic_id: str,
    confirm: bool = Query(default=False, description="Must be true; permanent deletes cannot be undone"),
    repo: TopicRepository = Depends(get_topic_repository),
):
    return _hard_delete(repo, topic_id, confirm)


@router.delete("/subtopics/{subtopic_id}", response_model=SuccessResponse)
def hard_delete_subtopic(
    subtopic_id: str,
    confirm: bool = Query(default=False, description="Must be true; permanent deletes cannot be undone"),
    repo: SubtopicRepository = Depends(get_subtopic_repository),
):
    return _hard_delete(repo, subtopic_id, confirm)
