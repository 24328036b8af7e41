"""Idempotent DDL applied at startup."""

from __future__ import annotations

import logging
from typing import Iterable

from techconnect.domain.announcements.service import AnnouncementStore, table_ddl
from techconnect.domain.identity.models import Role

LOGGER = logging.getLogger(__name__)

_ROLE_VALUES = ", ".join(f"'{role.value}'" for role in Role)

USERS_DDL = f"""
	CREATE TABLE IF NOT EXISTS users (
		id UUID PRIMARY KEY,
		name TEXT NOT NULL,
		email TEXT NOT NULL,
		password_hash TEXT NOT NULL,
		role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ({_ROLE_VALUES})),
		created_at TIMESTAMPTZ NOT NULL DEFAULT now()
	)
"""

USERS_EMAIL_INDEX = "CREATE UNIQUE INDEX IF NOT EXISTS users_email_key ON users (email)"


async def ensure_schema(pool, stores: Iterable[AnnouncementStore]) -> None:
	async with pool.acquire() as conn:
		async with conn.transaction():
			await conn.execute(USERS_DDL)
			await conn.execute(USERS_EMAIL_INDEX)
			for store in stores:
				await conn.execute(table_ddl(store.club))
				LOGGER.info("schema.ensure", extra={"table": store.table})
