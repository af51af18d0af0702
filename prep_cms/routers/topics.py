from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from prep_cms.config import settings
from prep_cms.repositories.topics import TopicRepository
from prep_cms.routers.dependencies import get_topic_repository
from prep_cms.schemas.common import DataResponse, Page, ShelvedUpdate, SuccessResponse
from prep_cms.schemas.topic import TopicOption, TopicOut, TopicWithSubject


router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=Page[TopicWithSubject])
def list_topics(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    search: str = Query(default=""),
    show_shelved: bool = Query(default=False),
    subject_id: str | None = Query(default=None, description="Only topics of this subject"),
    repo: TopicRepository = Depends(get_topic_repository),
):
    return repo.list(
        page=page,
        page_size=page_size,
        search=search,
        show_shelved=show_shelved,
        parent_id=subject_id,
    )


@router.get("/options", response_model=list[TopicOption])
def topic_options(
    active_only: bool = Query(default=False),
    subject_id: str | None = Query(default=None),
    repo: TopicRepository = Depends(get_topic_repository),
):
    return repo.options(active_only=active_only, parent_id=subject_id)


@router.get("/{topic_id}", response_model=TopicWithSubject)
def get_topic(topic_id: str, repo: TopicRepository = Depends(get_topic_repository)):
    return repo.get_by_id(topic_id)


@router.post("", response_model=DataResponse[TopicOut], status_code=status.HTTP_201_CREATED)
def create_topic(
    payload: dict[str, Any] = Body(...),
    repo: TopicRepository = Depends(get_topic_repository),
):
    row = repo.create(payload)
    return DataResponse[TopicOut](data=TopicOut.model_validate(row))


@router.patch("/{topic_id}", response_model=DataResponse[TopicOut])
def update_topic(
    topic_id: str,
    payload: dict[str, Any] = Body(...),
    repo: TopicRepository = Depends(get_topic_repository),
):
    row = repo.update(topic_id, payload)
    return DataResponse[TopicOut](data=TopicOut.model_validate(row))


@router.patch("/{topic_id}/shelved", response_model=DataResponse[TopicOut])
def set_topic_shelved(
    topic_id: str,
    payload: ShelvedUpdate,
    repo: TopicRepository = Depends(get_topic_repository),
):
    row = repo.toggle_shelved(topic_id, payload.is_shelved)
    return DataResponse[TopicOut](data=TopicOut.model_validate(row))


@router.delete("/{topic_id}", response_model=SuccessResponse)
def delete_topic(topic_id: str, repo: TopicRepository = Depends(get_topic_repository)):
    repo.soft_delete(topic_id)
    return SuccessResponse()
