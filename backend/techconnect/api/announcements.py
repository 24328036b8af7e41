"""FastAPI routes for club announcements.

One router is built per configured club; every router exposes the same
``/get``, ``/add`` and ``/delete/{id}`` contract under ``/api/<club>``.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from techconnect.domain.announcements import schemas
from techconnect.domain.announcements.models import Announcement
from techconnect.domain.announcements.service import AnnouncementError, AnnouncementStore
from techconnect.infra.auth import AuthenticatedUser, require_club_read, require_club_role


def _to_response(announcement: Announcement) -> schemas.AnnouncementResponse:
    return schemas.AnnouncementResponse(
        id=announcement.id,
        club=announcement.club.value,
        title=announcement.title,
        message=announcement.message,
        created_at=announcement.created_at,
    )


def _http_error(exc: AnnouncementError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.reason)


def build_router(store: AnnouncementStore) -> APIRouter:
    club = store.club
    router = APIRouter(prefix=f"/api/{club.value}", tags=[f"announcements:{club.value}"])
    require_member = require_club_role(club)
    read_guard = require_club_read(club)

    @router.get("/get", response_model=List[schemas.AnnouncementResponse], name=f"{club.value}_list")
    async def list_announcements(
        _: AuthenticatedUser = Depends(read_guard),
    ) -> List[schemas.AnnouncementResponse]:
        items = await store.list()
        return [_to_response(item) for item in items]

    @router.post(
        "/add",
        response_model=schemas.AnnouncementResponse,
        status_code=status.HTTP_201_CREATED,
        name=f"{club.value}_add",
    )
    async def add_announcement(
        payload: schemas.AnnouncementCreateRequest,
        auth_user: AuthenticatedUser = Depends(require_member),
    ) -> schemas.AnnouncementResponse:
        try:
            result = await store.create(payload.title, payload.message, auth_user.role)
        except AnnouncementError as exc:
            raise _http_error(exc) from None
        return _to_response(result)

    @router.delete(
        "/delete/{announcement_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"{club.value}_delete",
    )
    async def delete_announcement(
        announcement_id: str,
        auth_user: AuthenticatedUser = Depends(require_member),
    ) -> Response:
        try:
            await store.delete(announcement_id, auth_user.role)
        except AnnouncementError as exc:
            raise _http_error(exc) from None
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
