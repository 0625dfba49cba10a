# backend/modules/suggestion_boxes/schemas/box_schemas.py

import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from core.mixins import as_utc

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9A-Fa-f]{3}){1,2}$")


def _require_text(value: str, message: str) -> str:
    if not value or not value.strip():
        raise ValueError(message)
    return value


def _validate_color(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if not HEX_COLOR_PATTERN.match(value):
        raise ValueError("Color must be a hex value such as #3B82F6")
    return value


# Suggestion box schemas
class BoxBase(BaseModel):
    """Fields an owner controls on a suggestion box"""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    color: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _require_text(v, "Title is required")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return _validate_color(v)


class BoxCreate(BoxBase):
    """Schema for creating a suggestion box"""


class BoxUpdate(BoxBase):
    """Full replacement of title, description and color"""


class BoxResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: str
    color: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v):
        return as_utc(v)


class BoxEnvelope(BaseModel):
    box: BoxResponse


class BoxListEnvelope(BaseModel):
    boxes: List[BoxResponse]


class DeleteResult(BaseModel):
    success: bool = True


class SubmissionLinkResponse(BaseModel):
    box_id: str
    url: str


# Suggestion schemas
class SuggestionCreate(BaseModel):
    """Public submission; always stored as anonymous"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    box_id: str = Field(..., alias="boxId", min_length=1)
    content: str = Field(..., max_length=10000)
    rating: Optional[StrictInt] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _require_text(v, "Content is required")


class SuggestionRate(BaseModel):
    """Owner's star rating; range is checked by the access-control layer"""

    model_config = ConfigDict(extra="forbid")

    rating: Optional[StrictInt] = None


class SuggestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    box_id: str
    content: str
    rating: Optional[int]
    admin_rating: Optional[int]
    is_anonymous: bool
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v):
        return as_utc(v)


class SuggestionEnvelope(BaseModel):
    suggestion: SuggestionResponse


class SuggestionListEnvelope(BaseModel):
    suggestions: List[SuggestionResponse]
