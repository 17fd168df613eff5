"""Pydantic models for API request bodies."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Request model accepting camelCase keys or field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BloodPressureIn(ApiModel):
    systolic: float
    diastolic: float


class UserCreate(ApiModel):
    """Registration payload."""

    name: str
    email: str
    password: str
    age: int | None = None
    gender: str | None = None
    height_cm: float | None = Field(default=None, alias="height")
    weight_kg: float | None = Field(default=None, alias="weight")
    target_weight_kg: float | None = Field(default=None, alias="targetWeight")
    activity_level: str | None = None
    allergies: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    health_conditions: list[str] = Field(default_factory=list)
    medications: list[str] = Field(default_factory=list)
    blood_pressure: BloodPressureIn | None = None
    blood_glucose: float | None = None


class UserUpdate(ApiModel):
    """Partial profile update payload."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    age: int | None = None
    gender: str | None = None
    height_cm: float | None = Field(default=None, alias="height")
    weight_kg: float | None = Field(default=None, alias="weight")
    target_weight_kg: float | None = Field(default=None, alias="targetWeight")
    activity_level: str | None = None
    allergies: list[str] | None = None
    dietary_restrictions: list[str] | None = None
    health_conditions: list[str] | None = None
    medications: list[str] | None = None
    blood_pressure: BloodPressureIn | None = None
    blood_glucose: float | None = None


class FoodItemIn(ApiModel):
    """A food inside a meal; nutrients are per unit of quantity."""

    food_id: str | None = None
    name: str
    quantity: float = 1.0
    measure: str | None = None
    nutrients: dict[str, Any] = Field(default_factory=dict)


class MealCreate(ApiModel):
    meal_type: str
    foods: list[FoodItemIn]
    logged_at: datetime | None = Field(default=None, alias="date")
    notes: str | None = None


class MealUpdate(ApiModel):
    meal_type: str | None = None
    foods: list[FoodItemIn] | None = None
    logged_at: datetime | None = Field(default=None, alias="date")
    notes: str | None = None


class HealthMetricCreate(ApiModel):
    type: str
    value: float | dict[str, Any]
    unit: str | None = None
    recorded_at: datetime | None = Field(default=None, alias="date")
    notes: str | None = None


class HealthMetricUpdate(ApiModel):
    type: str | None = None
    value: float | dict[str, Any] | None = None
    unit: str | None = None
    recorded_at: datetime | None = Field(default=None, alias="date")
    notes: str | None = None
