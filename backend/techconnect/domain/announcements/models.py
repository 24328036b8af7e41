"""Domain models for club announcements."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from techconnect.domain.identity.models import Role


@dataclass
class Announcement:
    id: UUID
    club: Role
    title: str
    message: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any], club: Role) -> "Announcement":
        raw_id = record["id"]
        return cls(
            id=raw_id if isinstance(raw_id, UUID) else UUID(str(raw_id)),
            club=club,
            title=record["title"],
            message=record["message"],
            created_at=record.get("created_at"),
        )
