"""Validation guards for identity flows."""

from __future__ import annotations

PASSWORD_MIN_LEN = 8
NAME_MAX_LEN = 80


class IdentityPolicyError(ValueError):
	"""Raised when a policy constraint is violated."""

	def __init__(self, reason: str):
		super().__init__(reason)
		self.reason = reason


class EmailConflict(IdentityPolicyError):
	"""Raised when an email is already associated to an account."""


class PasswordTooWeak(IdentityPolicyError):
	"""Raised when password requirements are not met."""


class NameInvalid(IdentityPolicyError):
	"""Raised when the display name is empty or too long."""


def normalise_email(email: str) -> str:
	return email.strip().lower()


def normalise_name(name: str) -> str:
	return " ".join(name.split())


def guard_password(password: str) -> None:
	if len(password) < PASSWORD_MIN_LEN:
		raise PasswordTooWeak("password_too_short")


def guard_name(name: str) -> None:
	if not name:
		raise NameInvalid("name_required")
	if len(name) > NAME_MAX_LEN:
		raise NameInvalid("name_too_long")
