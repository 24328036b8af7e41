"""Domain models for accounts and roles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import UUID

RecordLike = Mapping[str, Any]


def _as_uuid(value: Any) -> UUID:
	if isinstance(value, UUID):
		return value
	return UUID(str(value))


class Role(str, Enum):
	"""Closed set of account roles. Club roles double as announcement namespaces."""

	USER = "user"
	ADMIN = "admin"
	IET = "iet"
	IEEE = "ieee"
	ACM = "acm"
	IE = "ie"
	ISTE = "iste"

	@classmethod
	def parse(cls, value: Any) -> "Role":
		if isinstance(value, Role):
			return value
		text = str(value or "").strip().lower()
		try:
			return cls(text)
		except ValueError:
			raise ValueError(f"unknown_role:{text}") from None

	@property
	def is_club(self) -> bool:
		return self in CLUB_ROLES


CLUB_ROLES = frozenset({Role.IET, Role.IEEE, Role.ACM, Role.IE, Role.ISTE})


@dataclass(slots=True)
class User:
	id: UUID
	name: str
	email: str
	password_hash: str
	role: Role = Role.USER
	created_at: Optional[datetime] = None

	@classmethod
	def from_record(cls, record: RecordLike) -> "User":
		return cls(
			id=_as_uuid(record["id"]),
			name=str(record["name"]),
			email=str(record["email"]),
			password_hash=str(record.get("password_hash") or ""),
			role=Role.parse(record.get("role") or Role.USER.value),
			created_at=record.get("created_at"),
		)
