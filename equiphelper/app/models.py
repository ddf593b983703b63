"""Pydantic schemas shared across API layers."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class AskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: str
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    session_id: str = Field(alias="sessionId")


class ErrorResponse(BaseModel):
    error: str


class ConversationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    transcript: List[str] = Field(default_factory=list)


class EquipmentEntry(BaseModel):
    """One reference record. Unknown fields are kept but ignored."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    keywords: List[str] = Field(default_factory=list)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("keywords", mode="before")
    @classmethod
    def _only_string_keywords(cls, value):
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str) and item]

    @field_validator("image_url", mode="before")
    @classmethod
    def _string_or_none(cls, value):
        return value if isinstance(value, str) else None


class HealthResponse(BaseModel):
    status: str
    environment: str
    version: str = "0.1.0"
