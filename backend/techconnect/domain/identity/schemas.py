"""Pydantic schemas for identity flows."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from techconnect.domain.identity.models import Role, User


class RegisterRequest(BaseModel):
	name: Annotated[str, Field(min_length=1, max_length=80)]
	email: EmailStr
	password: Annotated[str, Field(min_length=8)]


class LoginRequest(BaseModel):
	email: EmailStr
	password: str


class UserOut(BaseModel):
	id: UUID
	name: str
	email: str
	role: Role
	created_at: Optional[datetime] = None

	@classmethod
	def from_user(cls, user: User) -> "UserOut":
		return cls(
			id=user.id,
			name=user.name,
			email=user.email,
			role=user.role,
			created_at=user.created_at,
		)


class LoginResponse(BaseModel):
	token: str
	token_type: Literal["bearer"] = "bearer"
	expires_in: int
	role: Role
	user: UserOut


class RoleUpdateRequest(BaseModel):
	role: Role

	@field_validator("role", mode="before")
	@classmethod
	def _parse_role(cls, value):
		return Role.parse(value)
