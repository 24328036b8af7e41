"""Service layer for registration, login, and role management."""

from __future__ import annotations

import logging
from typing import List
from uuid import UUID, uuid4

import asyncpg

from techconnect.domain.identity import models, policy, schemas
from techconnect.infra import jwt as jwt_helper
from techconnect.infra.password import check_needs_rehash, hash_password, verify_password
from techconnect.infra.postgres import get_pool
from techconnect.settings import settings

log = logging.getLogger(__name__)

_USER_COLUMNS = "id, name, email, password_hash, role, created_at"


class IdentityServiceError(Exception):
	"""Raised for service-level issues with optional HTTP status mapping."""

	def __init__(self, reason: str, *, status_code: int = 400):
		super().__init__(reason)
		self.reason = reason
		self.status_code = status_code


class LoginFailed(IdentityServiceError):
	def __init__(self, reason: str = "invalid_credentials") -> None:
		super().__init__(reason, status_code=401)


class UserNotFound(IdentityServiceError):
	def __init__(self) -> None:
		super().__init__("user_not_found", status_code=404)


def access_ttl_seconds() -> int:
	return settings.access_ttl_minutes * 60


def build_access_token(user: models.User) -> str:
	payload = {
		"sub": str(user.id),
		"role": user.role.value,
		"name": user.name,
		"email": user.email,
	}
	return jwt_helper.encode_access(payload, ttl_seconds=access_ttl_seconds())


async def register(payload: schemas.RegisterRequest) -> schemas.UserOut:
	email = policy.normalise_email(payload.email)
	name = policy.normalise_name(payload.name)
	policy.guard_name(name)
	policy.guard_password(payload.password)
	password_hash = hash_password(payload.password)

	pool = await get_pool()
	async with pool.acquire() as conn:
		try:
			row = await conn.fetchrow(
				f"""
				INSERT INTO users (id, name, email, password_hash, role)
				VALUES ($1, $2, $3, $4, $5)
				RETURNING {_USER_COLUMNS}
				""",
				uuid4(),
				name,
				email,
				password_hash,
				models.Role.USER.value,
			)
		except asyncpg.UniqueViolationError as exc:  # type: ignore[attr-defined]
			raise policy.EmailConflict("email_taken") from exc
	user = models.User.from_record(row)
	log.info("identity.register", extra={"user_id": str(user.id)})
	return schemas.UserOut.from_user(user)


async def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
	email = policy.normalise_email(payload.email)
	pool = await get_pool()
	async with pool.acquire() as conn:
		row = await conn.fetchrow(f"SELECT {_USER_COLUMNS} FROM users WHERE email = $1", email)
		if not row:
			raise LoginFailed()
		user = models.User.from_record(row)
		if not verify_password(user.password_hash, payload.password):
			raise LoginFailed()
		if check_needs_rehash(user.password_hash):
			user.password_hash = hash_password(payload.password)
			await conn.execute(
				"UPDATE users SET password_hash = $2 WHERE id = $1",
				user.id,
				user.password_hash,
			)

	token = build_access_token(user)
	log.info("identity.login", extra={"user_id": str(user.id), "role": user.role.value})
	return schemas.LoginResponse(
		token=token,
		expires_in=access_ttl_seconds(),
		role=user.role,
		user=schemas.UserOut.from_user(user),
	)


async def get_user(user_id: UUID | str) -> schemas.UserOut:
	try:
		uid = UUID(str(user_id))
	except ValueError:
		raise UserNotFound() from None
	pool = await get_pool()
	async with pool.acquire() as conn:
		row = await conn.fetchrow(f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1", uid)
	if not row:
		raise UserNotFound()
	return schemas.UserOut.from_user(models.User.from_record(row))


async def list_users() -> List[schemas.UserOut]:
	pool = await get_pool()
	async with pool.acquire() as conn:
		rows = await conn.fetch(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at ASC")
	return [schemas.UserOut.from_user(models.User.from_record(row)) for row in rows]


async def set_role(user_id: UUID | str, role: models.Role, *, actor_id: str) -> schemas.UserOut:
	"""Change a user's role. Existing tokens keep the old role until they expire."""
	try:
		uid = UUID(str(user_id))
	except ValueError:
		raise UserNotFound() from None
	pool = await get_pool()
	async with pool.acquire() as conn:
		row = await conn.fetchrow(
			f"UPDATE users SET role = $2 WHERE id = $1 RETURNING {_USER_COLUMNS}",
			uid,
			role.value,
		)
	if not row:
		raise UserNotFound()
	log.info("identity.role_changed", extra={"user_id": str(uid), "role": role.value, "actor_id": actor_id})
	return schemas.UserOut.from_user(models.User.from_record(row))
