"""Admin endpoints for account role management."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from techconnect.domain.identity import schemas, service
from techconnect.infra.auth import AuthenticatedUser, get_admin_user

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=list[schemas.UserOut])
async def list_users(_: AuthenticatedUser = Depends(get_admin_user)) -> list[schemas.UserOut]:
	return await service.list_users()


@router.patch("/users/{user_id}/role", response_model=schemas.UserOut)
async def update_role(
	user_id: str,
	payload: schemas.RoleUpdateRequest,
	actor: AuthenticatedUser = Depends(get_admin_user),
) -> schemas.UserOut:
	try:
		return await service.set_role(user_id, payload.role, actor_id=actor.id)
	except service.IdentityServiceError as exc:
		raise HTTPException(status_code=exc.status_code, detail=exc.reason) from None
