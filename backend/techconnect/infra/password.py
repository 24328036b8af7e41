"""Centralized password hashing configuration.

All modules requiring password hashing import from here so every stored
credential is an argon2id hash with its own random salt.
"""

from argon2 import PasswordHasher
from argon2 import exceptions as argon_exc

# Argon2id parameters
# - Memory: 64 MB (65536 KB)
# - Iterations (time_cost): 3
# - Parallelism: 4
PASSWORD_HASHER = PasswordHasher(
	time_cost=3,
	memory_cost=65536,
	parallelism=4,
	hash_len=32,
	salt_len=16,
)


def hash_password(password: str) -> str:
	"""Hash a password using Argon2id; the salt is embedded in the result."""
	return PASSWORD_HASHER.hash(password)


def verify_password(hash: str, password: str) -> bool:
	"""Verify a password against its hash.

	Returns True if valid, False otherwise.
	"""
	try:
		PASSWORD_HASHER.verify(hash, password)
		return True
	except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
		return False


def check_needs_rehash(hash: str) -> bool:
	"""Return True if the hash was created with different parameters."""
	return PASSWORD_HASHER.check_needs_rehash(hash)
