from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: list[T]
    count: int
    page: int
    page_size: int
    page_count: int


class DataResponse(BaseModel, Generic[T]):
    data: T


class SuccessResponse(BaseModel):
    success: bool = True


class ShelvedUpdate(BaseModel):
    is_shelved: bool


class OptionItem(BaseModel):
    id: str
    name: str
