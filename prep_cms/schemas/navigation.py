from __future__ import annotations

from pydantic import BaseModel


class NavSubtopic(BaseModel):
    id: str
    name: str


class NavTopic(BaseModel):
    id: str
    name: str
    subtopics: list[NavSubtopic] = []


class NavSubject(BaseModel):
    id: str
    name: str
    is_shelved: bool
    topics: list[NavTopic] = []


class NavigationResponse(BaseModel):
    subjects: list[NavSubject]
