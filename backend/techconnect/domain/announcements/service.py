"""Announcement store, one instance per club namespace.

Every club gets its own table (``announcements_<club>``) so one club's data and
failures stay isolated from the others. Table names are derived from the closed
``Role`` enumeration only, never from request input.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List
from uuid import UUID, uuid4

from techconnect.domain.announcements.models import Announcement
from techconnect.domain.identity.models import Role
from techconnect.domain.identity.rbac import authorize
from techconnect.infra.postgres import get_pool
from techconnect.obs import metrics as obs_metrics

log = logging.getLogger(__name__)


class AnnouncementError(Exception):
    """Base error carrying an API reason and HTTP status."""

    status_code = 400

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AnnouncementValidationError(AnnouncementError):
    status_code = 422


class AnnouncementForbidden(AnnouncementError):
    status_code = 403


class AnnouncementNotFound(AnnouncementError):
    status_code = 404


def table_name(club: Role) -> str:
    return f"announcements_{club.value}"


def table_ddl(club: Role) -> str:
    table = table_name(club)
    return f"""
        CREATE TABLE IF NOT EXISTS {table} (
            seq BIGSERIAL UNIQUE,
            id UUID PRIMARY KEY,
            title TEXT NOT NULL CHECK (length(btrim(title)) > 0),
            message TEXT NOT NULL CHECK (length(btrim(message)) > 0),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """


class AnnouncementStore:
    def __init__(self, club: Role):
        if not club.is_club:
            raise ValueError(f"not_a_club:{club.value}")
        self.club = club
        self.table = table_name(club)

    def __repr__(self) -> str:
        return f"AnnouncementStore({self.club.value!r})"

    def _guard(self, op: str, caller_role: Role | str) -> None:
        if not authorize(self.club, caller_role):
            obs_metrics.inc_announcement_op(self.club.value, op, "forbidden")
            raise AnnouncementForbidden("forbidden")

    async def list(self) -> List[Announcement]:
        """Return every announcement of this club in insertion order."""
        pool = await get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT id, title, message, created_at FROM {self.table} ORDER BY seq ASC"
            )
        obs_metrics.inc_announcement_op(self.club.value, "list")
        return [Announcement.from_record(row, self.club) for row in rows]

    async def create(self, title: str, message: str, caller_role: Role | str) -> Announcement:
        """Insert an announcement; both fields must be non-empty after stripping."""
        title = (title or "").strip()
        message = (message or "").strip()
        if not title:
            obs_metrics.inc_announcement_op(self.club.value, "create", "invalid")
            raise AnnouncementValidationError("title_required")
        if not message:
            obs_metrics.inc_announcement_op(self.club.value, "create", "invalid")
            raise AnnouncementValidationError("message_required")
        self._guard("create", caller_role)

        pool = await get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO {self.table} (id, title, message)
                VALUES ($1, $2, $3)
                RETURNING id, title, message, created_at
                """,
                uuid4(),
                title,
                message,
            )
        announcement = Announcement.from_record(row, self.club)
        obs_metrics.inc_announcement_op(self.club.value, "create")
        log.info("announcement.create", extra={"club": self.club.value, "announcement_id": str(announcement.id)})
        return announcement

    async def delete(self, announcement_id: UUID | str, caller_role: Role | str) -> None:
        """Remove an announcement by id; unknown or malformed ids raise NotFound."""
        self._guard("delete", caller_role)
        try:
            aid = UUID(str(announcement_id))
        except ValueError:
            obs_metrics.inc_announcement_op(self.club.value, "delete", "not_found")
            raise AnnouncementNotFound("announcement_not_found") from None

        pool = await get_pool()
        async with pool.acquire() as conn:
            deleted = await conn.fetchval(
                f"DELETE FROM {self.table} WHERE id = $1 RETURNING id",
                aid,
            )
        if deleted is None:
            obs_metrics.inc_announcement_op(self.club.value, "delete", "not_found")
            raise AnnouncementNotFound("announcement_not_found")
        obs_metrics.inc_announcement_op(self.club.value, "delete")
        log.info("announcement.delete", extra={"club": self.club.value, "announcement_id": str(aid)})


def build_stores(namespaces: Iterable[str]) -> Dict[Role, AnnouncementStore]:
    """Instantiate one store per configured club namespace, preserving order."""
    stores: Dict[Role, AnnouncementStore] = {}
    for namespace in namespaces:
        club = Role.parse(namespace)
        if club in stores:
            continue
        stores[club] = AnnouncementStore(club)
    return stores
