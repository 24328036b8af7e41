"""Pydantic schemas for the announcements API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class AnnouncementResponse(BaseModel):
    id: UUID
    club: str
    title: str
    message: str
    created_at: Optional[datetime] = None
