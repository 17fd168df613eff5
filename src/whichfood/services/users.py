"""User profile business logic."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

import bcrypt

from whichfood.domain.health import MetricType
from whichfood.domain.nutrition import NutrientGoals
from whichfood.domain.profiles import HealthSummary, UserProfile
from whichfood.errors import InvalidProfile, NotFound, UserAlreadyExists
from whichfood.services.anthropometrics import (
    ProfileBounds,
    bmi,
    bmr,
    tdee_for_profile,
)
from whichfood.services.goals import GoalPolicy, goals_for_profile
from whichfood.services.health import HealthMetricService

BCRYPT_MAX_BYTES = 72

_PROFILE_FIELDS = (
    "name",
    "email",
    "age",
    "gender",
    "height_cm",
    "weight_kg",
    "activity_level",
    "target_weight_kg",
    "allergies",
    "dietary_restrictions",
    "health_conditions",
    "medications",
)


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_by_id(self, user_id: UUID) -> UserProfile | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserProfile | None:
        """Return the user registered with an e-mail, if present."""

    def create_user(self, payload: dict[str, object]) -> UserProfile:
        """Create a user row and return it."""

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Update user columns and return the stored profile."""


@dataclass
class UserService:
    """Application service for registration and profile maintenance."""

    repository: UserRepository
    health_metric_service: HealthMetricService
    goal_policy: GoalPolicy = field(default_factory=GoalPolicy)
    bounds: ProfileBounds = field(default_factory=ProfileBounds)

    def register(self, payload: dict[str, object]) -> UserProfile:
        """Create a user and record their initial measurements."""
        name = str(payload.get("name") or "").strip()
        email = str(payload.get("email") or "").strip().lower()
        password = str(payload.get("password") or "")
        if not name or not email or not password:
            raise InvalidProfile("Name, email and password are required")
        self._validate(payload)
        if self.repository.get_by_email(email):
            raise UserAlreadyExists("User already exists")

        row = {key: payload.get(key) for key in _PROFILE_FIELDS}
        row.update(
            {
                "name": name,
                "email": email,
                "password_hash": hash_password(password),
                "allergies": _clean_list(payload.get("allergies")),
                "dietary_restrictions": _clean_list(
                    payload.get("dietary_restrictions")
                ),
                "health_conditions": _clean_list(payload.get("health_conditions")),
                "medications": _clean_list(payload.get("medications")),
            }
        )
        user = self.repository.create_user(row)
        self._record_measurements(user.id, payload)
        return user

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return a stored profile or raise NotFound."""
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile:
        """Apply a partial update, re-validating the resulting profile."""
        current = self.get_profile(user_id)
        updates = {
            key: value
            for key, value in changes.items()
            if key in _PROFILE_FIELDS and value is not None
        }
        if "email" in updates:
            updates["email"] = str(updates["email"]).strip().lower()
            existing = self.repository.get_by_email(updates["email"])
            if existing and existing.id != user_id:
                raise UserAlreadyExists("Email is already in use")
        for key in (
            "allergies",
            "dietary_restrictions",
            "health_conditions",
            "medications",
        ):
            if key in updates:
                updates[key] = _clean_list(updates[key])
        if changes.get("password"):
            updates["password_hash"] = hash_password(str(changes["password"]))

        merged = {
            "age": current.age,
            "gender": current.gender,
            "height_cm": current.height_cm,
            "weight_kg": current.weight_kg,
            "activity_level": current.activity_level,
            "target_weight_kg": current.target_weight_kg,
        }
        merged.update({key: updates[key] for key in merged if key in updates})
        self._validate(merged)

        updated = self.repository.update_user(user_id, updates) if updates else current
        self._record_measurements(user_id, changes)
        return updated

    def health_summary(self, profile: UserProfile) -> HealthSummary:
        """BMI, BMR and TDEE for a profile."""
        return HealthSummary(
            bmi=round(bmi(profile.height_cm, profile.weight_kg), 2),
            bmr=bmr(
                profile.weight_kg,
                profile.height_cm,
                profile.age,
                profile.gender,
                self.goal_policy.other_gender,
            ),
            daily_calories=float(
                tdee_for_profile(profile, self.goal_policy.other_gender)
            ),
        )

    def goals(self, profile: UserProfile) -> NutrientGoals:
        return goals_for_profile(profile, self.goal_policy)

    def _validate(self, payload: dict[str, object]) -> None:
        self.bounds.validate(
            age=payload.get("age"),
            gender=payload.get("gender"),
            height_cm=payload.get("height_cm"),
            weight_kg=payload.get("weight_kg"),
            activity_level=payload.get("activity_level"),
            target_weight_kg=payload.get("target_weight_kg"),
        )

    def _record_measurements(self, user_id: UUID, payload: dict[str, object]) -> None:
        if payload.get("weight_kg") is not None:
            self.health_metric_service.add_metric(
                user_id, MetricType.WEIGHT, payload["weight_kg"]
            )
        pressure = payload.get("blood_pressure")
        if isinstance(pressure, dict) and pressure.get("systolic") and pressure.get(
            "diastolic"
        ):
            self.health_metric_service.add_metric(
                user_id, MetricType.BLOOD_PRESSURE, pressure
            )
        if payload.get("blood_glucose") is not None:
            self.health_metric_service.add_metric(
                user_id, MetricType.BLOOD_GLUCOSE, payload["blood_glucose"]
            )


def hash_password(password: str) -> str:
    """Return a bcrypt hash; input beyond bcrypt's limit is truncated."""
    secret = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    secret = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.checkpw(secret, password_hash.encode("utf-8"))


def _clean_list(value: object) -> list[str]:
    if not isinstance(value, list | tuple | set | frozenset):
        return []
    return [str(item).strip() for item in value if str(item).strip()]
