"""User profile domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class UserProfile:
    """Registered user with body metrics and dietary preferences."""

    id: UUID
    name: str
    email: str
    password_hash: str
    age: int
    gender: str
    height_cm: float
    weight_kg: float
    activity_level: str
    target_weight_kg: float | None = None
    allergies: frozenset[str] = field(default_factory=frozenset)
    dietary_restrictions: frozenset[str] = field(default_factory=frozenset)
    health_conditions: tuple[str, ...] = ()
    medications: tuple[str, ...] = ()
    created_at: datetime | None = None


@dataclass(frozen=True)
class HealthSummary:
    """Derived body figures shown alongside a profile."""

    bmi: float
    bmr: float
    daily_calories: float
