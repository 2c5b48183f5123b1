"""Security utilities for authentication and authorization.

This module provides:
- Password hashing using Argon2 (PHC winner, OWASP recommended)
- The in-process user directory behind HTTP Basic authentication
- Role definitions used by the route guards
"""

from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError

from catalogue_management.config import Settings, get_settings


class Role(StrEnum):
    """Roles a catalogue user can hold."""

    ADMIN = "ADMIN"
    WORKER = "WORKER"


# Argon2 configuration (OWASP recommended parameters)
_password_hasher = PasswordHasher(
    time_cost=3,
    memory_cost=65536,  # 64 MB
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: Plain text password to hash.

    Returns:
        Argon2id hash string containing algorithm parameters and salt.
    """
    return _password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        password: Plain text password to verify.
        hashed_password: Argon2id hash to verify against.

    Returns:
        True if password matches, False otherwise.
    """
    try:
        return _password_hasher.verify(hashed_password, password)
    except (VerificationError, InvalidHash):
        return False


@dataclass(frozen=True, slots=True)
class User:
    """An authenticated principal."""

    username: str
    password_hash: str
    roles: frozenset[Role]

    def has_any_role(self, *roles: Role) -> bool:
        return not self.roles.isdisjoint(roles)


class UserDirectory:
    """Fixed set of users configured for the service."""

    def __init__(self, users: list[User]) -> None:
        self._users = {user.username: user for user in users}

    @classmethod
    def from_settings(cls, settings: Settings) -> "UserDirectory":
        """Build the admin and worker accounts from settings, hashing their passwords."""
        return cls(
            [
                User(
                    username=settings.admin_username,
                    password_hash=hash_password(settings.admin_password),
                    roles=frozenset({Role.ADMIN}),
                ),
                User(
                    username=settings.worker_username,
                    password_hash=hash_password(settings.worker_password),
                    roles=frozenset({Role.WORKER}),
                ),
            ]
        )

    def authenticate(self, username: str, password: str) -> User | None:
        """Return the user if the credentials match, None otherwise."""
        user = self._users.get(username)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user


@lru_cache
def get_user_directory() -> UserDirectory:
    """Get the cached user directory."""
    return UserDirectory.from_settings(get_settings())
