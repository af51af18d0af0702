# preferences.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReaderSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    font_size: int = Field(default=18, ge=12, le=32)
    line_height: float = Field(default=1.7, ge=1.0, le=3.0)
    content_width: int = Field(default=768, ge=480, le=1400)


class ReaderSettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    font_size: int | None = None
    line_height: float | None = None
    content_width: int | None = None


class ClientPreferences(BaseModel):
    model_config = ConfigDict(extra="forbid")

    collapsed: bool = False
    open_subjects: list[str] = Field(default_factory=list)
    open_topics: list[str] = Field(default_factory=list)
    reader: ReaderSettings = Field(default_factory=ReaderSettings)

    @field_validator("open_subjects", "open_topics", mode="before")
    @classmethod
    def _coerce_open_map(cls, v):
        # The sidebar historically kept ``{id: bool}`` maps; keep only the open ids.
        if v is None:
            return []
        if isinstance(v, dict):
            return [str(k) for k, is_open in v.items() if is_open]
        return v

    @field_validator("open_subjects", "open_topics")
    @classmethod
    def _dedupe(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        result: list[str] = []
        for item in v:
            key = item.strip()
            if key and key not in seen:
                seen.add(key)
                result.append(key)
        return result


class ClientPreferencesUpdate(BaseModel):
    """Partial preferences; range checks run on the merged document."""

    model_config = ConfigDict(extra="forbid")

    collapsed: bool | None = None
    open_subjects: list[str] | dict[str, bool] | None = None
    open_topics: list[str] | dict[str, bool] | None = None
    reader: ReaderSettingsUpdate | None = None


class ClientPreferencesResponse(BaseModel):
    client_id: str
    preferences: ClientPreferences
