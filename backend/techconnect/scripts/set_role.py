"""Assign a role to an existing account by email.

Bootstraps the first admin (who can then manage roles over the API) and lets
operators fix a club assignment without a token::

    techconnect-set-role asha@college.edu iet
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from techconnect.domain.identity import policy, service
from techconnect.domain.identity.models import Role
from techconnect.infra import postgres


async def set_role_by_email(email: str, role: Role) -> Optional[str]:
	"""Return the updated user's id, or None when no account has that email."""
	pool = await postgres.init_pool()
	try:
		async with pool.acquire() as conn:
			user_id = await conn.fetchval(
				"SELECT id FROM users WHERE email = $1",
				policy.normalise_email(email),
			)
		if user_id is None:
			return None
		user = await service.set_role(user_id, role, actor_id="cli")
		return str(user.id)
	finally:
		await postgres.close_pool()


def main(argv: Optional[Sequence[str]] = None) -> int:
	parser = argparse.ArgumentParser(description="Set the role of a registered account.")
	parser.add_argument("email")
	parser.add_argument("role", help=", ".join(role.value for role in Role))
	args = parser.parse_args(argv)

	try:
		role = Role.parse(args.role)
	except ValueError:
		parser.error(f"unknown role: {args.role}")

	user_id = asyncio.run(set_role_by_email(args.email, role))
	if user_id is None:
		print(f"ERROR: no account registered as {args.email}. Register it first.", file=sys.stderr)
		return 1
	print(f"{args.email} ({user_id}) is now '{role.value}'.")
	return 0


if __name__ == "__main__":
	sys.exit(main())
