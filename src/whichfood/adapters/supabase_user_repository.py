"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from whichfood.domain.profiles import UserProfile
from whichfood.services.users import UserRepository

_USER_COLUMNS = (
    "id, name, email, password_hash, age, gender, height_cm, weight_kg, "
    "activity_level, target_weight_kg, allergies, dietary_restrictions, "
    "health_conditions, medications, created_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserProfile | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserProfile | None:
        """Return the user registered with an e-mail, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, payload: dict[str, object]) -> UserProfile:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Update user columns and return the stored row."""
        response = (
            self.client.table("users")
            .update(payload)
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserProfile:
    target = row.get("target_weight_kg")
    created_at = row.get("created_at")
    return UserProfile(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        password_hash=str(row.get("password_hash") or ""),
        age=int(row["age"]),
        gender=str(row["gender"]),
        height_cm=float(row["height_cm"]),
        weight_kg=float(row["weight_kg"]),
        activity_level=str(row["activity_level"]),
        target_weight_kg=float(target) if target is not None else None,
        allergies=frozenset(row.get("allergies") or []),
        dietary_restrictions=frozenset(row.get("dietary_restrictions") or []),
        health_conditions=tuple(row.get("health_conditions") or []),
        medications=tuple(row.get("medications") or []),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
