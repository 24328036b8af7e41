"""Role checks for club-scoped operations."""

from __future__ import annotations

from typing import Any

from techconnect.domain.identity.models import Role


def authorize(required_role: Any, validated_role: Any) -> bool:
	"""Allow iff the caller's role equals the required club role.

	Comparison is case-insensitive. There is no implicit superuser: ``admin``
	and ``user`` never satisfy a club requirement. Unknown roles are denied.
	"""
	try:
		required = Role.parse(required_role)
		actual = Role.parse(validated_role)
	except ValueError:
		return False
	return required is actual
