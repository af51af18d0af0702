from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from prep_cms.config import settings
from prep_cms.repositories.subjects import SubjectRepository
from prep_cms.routers.dependencies import get_subject_repository
from prep_cms.schemas.common import DataResponse, OptionItem, Page, ShelvedUpdate, SuccessResponse
from prep_cms.schemas.subject import SubjectCounts, SubjectDetail, SubjectListItem, SubjectOut


router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("", response_model=Page[SubjectListItem])
def list_subjects(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    search: str = Query(default="", description="Case-insensitive match on name or description"),
    show_shelved: bool = Query(default=False),
    repo: SubjectRepository = Depends(get_subject_repository),
):
    return repo.list(page=page, page_size=page_size, search=search, show_shelved=show_shelved)


@router.get("/options", response_model=list[OptionItem])
def subject_options(
    active_only: bool = Query(default=False, description="Only subjects marked active"),
    repo: SubjectRepository = Depends(get_subject_repository),
):
    return repo.options(active_only=active_only)


@router.get("/{subject_id}", response_model=SubjectDetail)
def get_subject(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)):
    return repo.get_by_id(subject_id)


@router.get("/{subject_id}/counts", response_model=SubjectCounts)
def get_subject_counts(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)):
    return repo.get_counts(subject_id)


@router.post("", response_model=DataResponse[SubjectOut], status_code=status.HTTP_201_CREATED)
def create_subject(
    payload: dict[str, Any] = Body(...),
    repo: SubjectRepository = Depends(get_subject_repository),
):
    row = repo.create(payload)
    return DataResponse[SubjectOut](data=SubjectOut.model_validate(row))


@router.patch("/{subject_id}", response_model=DataResponse[SubjectOut])
def update_subject(
    subject_id: str,
    payload: dict[str, Any] = Body(...),
    repo: SubjectRepository = Depends(get_subject_repository),
):
    row = repo.update(subject_id, payload)
    return DataResponse[SubjectOut](data=SubjectOut.model_validate(row))


@router.patch("/{subject_id}/shelved", response_model=DataResponse[SubjectOut])
def set_subject_shelved(
    subject_id: str,
    payload: ShelvedUpdate,
    repo: SubjectRepository = Depends(get_subject_repository),
):
    row = repo.toggle_shelved(subject_id, payload.is_shelved)
    return DataResponse[SubjectOut](data=SubjectOut.model_validate(row))


@router.delete("/{subject_id}", response_model=SuccessResponse)
def delete_subject(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)):
    repo.soft_delete(subject_id)
    return SuccessResponse()
