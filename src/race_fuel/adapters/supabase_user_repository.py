"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from race_fuel.domain.models import UserRecord
from race_fuel.services.users import UserRepository

_USER_COLUMNS = "id, auth0_sub, email, first_name, last_name"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_auth_sub(self, auth_sub: str) -> UserRecord | None:
        """Return the user for an identity-provider subject, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("auth0_sub", auth_sub)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self, auth_sub: str, email: str | None, first_name: str, last_name: str
    ) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "auth0_sub": auth_sub,
                    "email": email,
                    "first_name": first_name,
                    "last_name": last_name,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(row["id"]),
        auth_sub=str(row["auth0_sub"]),
        email=row.get("email"),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
    )
