"""Domain models for the race fuel planner."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    auth_sub: str
    email: str | None
    first_name: str
    last_name: str
