"""Authentication helpers for FastAPI endpoints.

- Bearer JWT verification (HS256) using settings.secret_key.
- A club-role guard applied to announcement routes.
- An admin guard for role management.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from techconnect.domain.identity.models import Role
from techconnect.domain.identity.rbac import authorize
from techconnect.infra import jwt as jwt_helper
from techconnect.obs import logging as obs_logging
from techconnect.obs import metrics as obs_metrics
from techconnect.settings import settings


@dataclass(slots=True)
class AuthenticatedUser:
	id: str
	role: Role
	name: Optional[str] = None
	email: Optional[str] = None


_bearer_scheme = HTTPBearer(auto_error=False)


def _unauthenticated() -> HTTPException:
	return HTTPException(
		status_code=status.HTTP_401_UNAUTHORIZED,
		detail="invalid_token",
		headers={"WWW-Authenticate": "Bearer"},
	)


def verify_access_jwt(token: str) -> AuthenticatedUser:
	"""Decode and validate an access JWT and return an AuthenticatedUser.

	Requirements:
	- issuer="techconnect-api", audience="techconnect-fe"
	- required claims: sub, role, exp, iat
	- role must belong to the closed Role enumeration
	"""
	try:
		payload = jwt_helper.decode_access(token)
	except Exception:
		# Normalise all decode failures to invalid_token for the API surface
		raise _unauthenticated() from None

	sub = str(payload.get("sub") or "").strip()
	if not sub:
		raise _unauthenticated()
	try:
		role = Role.parse(payload.get("role"))
	except ValueError:
		raise _unauthenticated() from None

	name = payload.get("name")
	email = payload.get("email")
	return AuthenticatedUser(
		id=sub,
		role=role,
		name=str(name) if name is not None else None,
		email=str(email) if email is not None else None,
	)


async def get_current_user(
	credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> AuthenticatedUser:
	"""Resolve the authenticated user from the Authorization header."""
	if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
		user = verify_access_jwt(credentials.credentials)
		obs_logging.bind_context(user_id=user.id)
		return user
	raise _unauthenticated()


async def get_admin_user(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
	if user.role is Role.ADMIN:
		return user
	raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")


def require_club_role(club: Role):
	"""Return a dependency that admits only callers whose role equals ``club``.

	Usage:
		@router.post("/add", dependencies=[Depends(require_club_role(Role.IET))])
	"""
	if not club.is_club:
		raise ValueError(f"not_a_club:{club.value}")

	async def _dep(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
		if authorize(club, user.role):
			return user
		obs_metrics.inc_authz_denied(club.value)
		raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")

	return _dep


def require_club_read(club: Role):
	"""Return a dependency gating the announcement list of ``club``.

	Under the ``club`` read policy this is the same check as writes; under
	``authenticated`` any valid token may read. The policy is read per request.
	"""
	club_guard = require_club_role(club)

	async def _dep(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
		if settings.announcement_read_policy == "authenticated":
			return user
		return await club_guard(user)

	return _dep
