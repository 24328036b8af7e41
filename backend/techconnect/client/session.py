"""Client-side session context.

The portal keeps a single ``user`` record (token, role and identity) in a local
persistence slot. It is loaded once when the client starts and handed to every
view; logout or an expired/rejected token invalidates it in one place.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import jwt

from techconnect.domain.identity.models import Role

log = logging.getLogger(__name__)

SESSION_KEY = "user"


class SessionStore:
	"""JSON file holding named slots, the local-storage equivalent for the client."""

	def __init__(self, path: Path | str, key: str = SESSION_KEY):
		self.path = Path(path)
		self.key = key

	def _read_all(self) -> Dict[str, Any]:
		if not self.path.exists():
			return {}
		try:
			data = json.loads(self.path.read_text("utf-8"))
		except (OSError, json.JSONDecodeError):
			log.error("session.store_unreadable", extra={"path": str(self.path)})
			return {}
		return data if isinstance(data, dict) else {}

	def read(self) -> Optional[Dict[str, Any]]:
		record = self._read_all().get(self.key)
		return record if isinstance(record, dict) else None

	def write(self, record: Dict[str, Any]) -> None:
		data = self._read_all()
		data[self.key] = record
		self.path.parent.mkdir(parents=True, exist_ok=True)
		self.path.write_text(json.dumps(data, indent=2), "utf-8")

	def clear(self) -> None:
		data = self._read_all()
		if self.key not in data:
			return
		del data[self.key]
		self.path.write_text(json.dumps(data, indent=2), "utf-8")


def _token_expiry(token: str) -> Optional[float]:
	try:
		claims = jwt.decode(token, options={"verify_signature": False})
	except jwt.InvalidTokenError:
		return None
	exp = claims.get("exp")
	return float(exp) if isinstance(exp, (int, float)) else None


@dataclass
class SessionContext:
	token: Optional[str] = None
	role: Optional[Role] = None
	user_id: Optional[str] = None
	name: Optional[str] = None
	email: Optional[str] = None
	store: Optional[SessionStore] = field(default=None, repr=False)

	@classmethod
	def load(cls, store: SessionStore) -> "SessionContext":
		"""Read the persisted record once; anything unusable yields an empty session."""
		record = store.read()
		if not record or not record.get("token"):
			return cls(store=store)
		try:
			role = Role.parse(record.get("role"))
		except ValueError:
			log.error("session.unknown_role")
			return cls(store=store)
		return cls(
			token=str(record["token"]),
			role=role,
			user_id=record.get("id"),
			name=record.get("name"),
			email=record.get("email"),
			store=store,
		)

	@property
	def expires_at(self) -> Optional[float]:
		if not self.token:
			return None
		return _token_expiry(self.token)

	def is_usable(self, now: Optional[float] = None) -> bool:
		if not self.token or self.role is None:
			return False
		expires_at = self.expires_at
		if expires_at is None:
			return False
		return (now or time.time()) < expires_at

	def establish(self, login_payload: Dict[str, Any]) -> None:
		"""Adopt and persist a login response ``{token, role, user: {...}}``."""
		user = login_payload.get("user") or {}
		self.token = str(login_payload["token"])
		self.role = Role.parse(login_payload.get("role") or user.get("role"))
		self.user_id = user.get("id")
		self.name = user.get("name")
		self.email = user.get("email")
		if self.store is not None:
			self.store.write(
				{
					"token": self.token,
					"role": self.role.value,
					"id": self.user_id,
					"name": self.name,
					"email": self.email,
				}
			)

	def invalidate(self) -> None:
		self.token = None
		self.role = None
		self.user_id = None
		self.name = None
		self.email = None
		if self.store is not None:
			self.store.clear()
