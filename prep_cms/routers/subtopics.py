from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from prep_cms.config import settings
from prep_cms.repositories.subtopics import SubtopicRepository
from prep_cms.routers.dependencies import get_subtopic_repository
from prep_cms.schemas.common import DataResponse, Page, ShelvedUpdate, SuccessResponse
from prep_cms.schemas.subtopic import SubtopicOption, SubtopicOut, SubtopicWithParents


router = APIRouter(prefix="/subtopics", tags=["subtopics"])


@router.get("", response_model=Page[SubtopicWithParents])
def list_subtopics(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    search: str = Query(default=""),
    show_shelved: bool = Query(default=False),
    topic_id: str | None = Query(default=None, description="Only subtopics of this topic"),
    repo: SubtopicRepository = Depends(get_subtopic_repository),
):
    return repo.list(
        page=page,
        page_size=page_size,
        search=search,
        show_shelved=show_shelved,
        parent_id=topic_id,
    )


@router.get("/options", response_model=list[SubtopicOption])
def subtopic_options(
    active_only: bool = Query(default=False),
    topic_id: str | None = Query(default=None),
    repo: SubtopicRepository = Depends(get_subtopic_repository),
):
    return repo.options(active_only=active_only, parent_id=topic_id)


@router.get("/{subtopic_id}", response_model=SubtopicWithParents)
def get_subtopic(subtopic_id: str, repo: SubtopicRepository = Depends(get_subtopic_repository)):
    return repo.get_by_id(subtopic_id)


@router.post("", response_model=DataResponse[SubtopicOut], status_code=status.HTTP_201_CREATED)
def create_subtopic(
    payload: dict[str, Any] = Body(...),
    repo: SubtopicRepository = Depends(get_subtopic_repository),
):
    row = repo.create(payload)
    return DataResponse[SubtopicOut](data=SubtopicOut.model_validate(row))


@router.patch("/{subtopic_id}", response_model=DataResponse[SubtopicOut])
def update_subtopic(
    subtopic_id: str,
    payload: dict[str, Any] = Body(...),
    repo: SubtopicRepository = Depends(get_subtopic_repository),
):
    row = repo.update(subtopic_id, payload)
    return DataResponse[SubtopicOut](data=SubtopicOut.model_validate(row))


@router.patch("/{subtopic_id}/shelved", response_model=DataResponse[SubtopicOut])
def set_subtopic_shelved(
    subtopic_id: str,
    payload: ShelvedUpdate,
    repo: SubtopicRepository = Depends(get_subtopic_repository),
):
    row = repo.toggle_shelved(subtopic_id, payload.is_shelved)
    return DataResponse[SubtopicOut](data=SubtopicOut.model_validate(row))


@router.delete("/{subtopic_id}", response_model=SuccessResponse)
def delete_subtopic(subtopic_id: str, repo: SubtopicRepository = Depends(get_subtopic_repository)):
    repo.soft_delete(subtopic_id)
    return SuccessResponse()
