"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

from race_fuel.domain.errors import NotFoundError
from race_fuel.domain.models import UserRecord

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_auth_sub(self, auth_sub: str) -> UserRecord | None:
        """Return the user for an identity-provider subject, if present."""

    def create_user(
        self, auth_sub: str, email: str | None, first_name: str, last_name: str
    ) -> UserRecord:
        """Create and return a new user record."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def sync_user(
        self, auth_sub: str, email: str | None, first_name: str, last_name: str
    ) -> tuple[UserRecord, bool]:
        """Return the user for the subject, creating it on first login.

        The flag is True when a new user was created.
        """
        existing = self.repository.get_by_auth_sub(auth_sub)
        if existing:
            return existing, False

        created = self.repository.create_user(auth_sub, email, first_name, last_name)
        _logger.info("Created user %s", created.id)
        return created, True

    def require_user(self, auth_sub: str) -> UserRecord:
        """Return the user for the subject or raise when unknown."""
        user = self.repository.get_by_auth_sub(auth_sub)
        if user is None:
            raise NotFoundError("User", auth_sub)
        return user
