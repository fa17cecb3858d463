"""Media and comment schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from snapgram.models.media import MediaType
from snapgram.schemas.user import UserSummary


class MediaCreate(BaseModel):
    """Payload for posting media."""

    type: MediaType = MediaType.IMAGE
    caption: str | None = None
    link: str = Field(min_length=1, max_length=2048)
    latitude: float = Field(default=0.0, ge=-90, le=90)
    longitude: float = Field(default=0.0, ge=-180, le=180)


class MediaRead(BaseModel):
    """Serialized media with its owner resolved."""

    id: uuid.UUID
    type: MediaType
    caption: str | None = None
    link: str
    latitude: float
    longitude: float
    created_at: datetime
    owner: UserSummary

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    """Payload for commenting on media."""

    text: str = Field(min_length=1, max_length=2200)


class CommentRead(BaseModel):
    """Serialized comment."""

    id: uuid.UUID
    media_id: uuid.UUID
    text: str
    created_at: datetime
    author: UserSummary

    model_config = ConfigDict(from_attributes=True)
