"""
Data models for Health Tracker.

Defines Pydantic models for health snapshots, symptoms, user profiles and the
recommendation payloads returned to clients. Payload field names are part of
the public response format and must not be renamed.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional, Literal, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .bmi import BMICategory, calculate_bmi


def _new_id() -> str:
    return str(uuid.uuid4())


class ActivityLevel(str, Enum):
    """Self-reported activity levels."""
    UNSPECIFIED = ""
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


class EmotionalState(str, Enum):
    """Self-reported emotional states."""
    UNSPECIFIED = ""
    STRESSED = "stressed"
    ANXIOUS = "anxious"
    SAD = "sad"
    HAPPY = "happy"
    NEUTRAL = "neutral"


class SymptomType(str, Enum):
    """Symptom catalog sections."""
    PHYSICAL = "physical"
    MENTAL = "mental"


class RecommendationAxis(str, Enum):
    """Independent recommendation categories."""
    FOOD = "food"
    EXERCISE = "exercise"
    EMOTIONAL = "emotional"


class HealthDataRequest(BaseModel):
    """
    Input for a new health record.

    Validates:
    - Weight and height must be positive
    """
    weight_kg: float = Field(..., gt=0, le=500, description="Body weight in kg")
    height_cm: float = Field(..., gt=0, le=300, description="Height in cm")
    activity_level: ActivityLevel = ActivityLevel.UNSPECIFIED
    emotional_state: EmotionalState = EmotionalState.UNSPECIFIED
    daily_schedule: str = ""
    notes: str = ""


class HealthSnapshot(BaseModel):
    """
    A recorded health measurement.

    Immutable once created. ``bmi`` is derived from weight and height when
    not supplied; a zero-valued snapshot stands in for "no data yet".
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    user_id: str = ""
    weight_kg: float = Field(default=0.0, ge=0)
    height_cm: float = Field(default=0.0, ge=0)
    bmi: float = Field(default=0.0, ge=0)
    activity_level: ActivityLevel = ActivityLevel.UNSPECIFIED
    emotional_state: EmotionalState = EmotionalState.UNSPECIFIED
    daily_schedule: str = ""
    notes: str = ""
    record_date: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="before")
    @classmethod
    def derive_bmi(cls, data: Any) -> Any:
        """Fill in BMI from weight and height when it was not given."""
        if isinstance(data, dict) and "bmi" not in data:
            data = dict(data)
            data["bmi"] = calculate_bmi(
                data.get("weight_kg", 0.0) or 0.0,
                data.get("height_cm", 0.0) or 0.0,
            )
        return data


class SymptomRequest(BaseModel):
    """Input for logging a symptom."""
    symptom_type: SymptomType
    symptom_name: str = Field(..., min_length=1)
    severity: int = Field(..., ge=1, le=10, description="Severity on 1-10 scale")
    notes: str = ""


class Symptom(BaseModel):
    """
    Logged symptom.

    Validates:
    - Severity: 1-10 scale
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    user_id: str = ""
    symptom_type: SymptomType
    symptom_name: str = Field(..., min_length=1)
    severity: int = Field(..., ge=1, le=10)
    notes: str = ""
    logged_at: datetime = Field(default_factory=datetime.now)


class SymptomFrequency(BaseModel):
    """How often a symptom name was logged."""
    symptom_name: str
    count: int


class SymptomStats(BaseModel):
    """Aggregate symptom statistics for a user."""
    frequent_symptoms: list[SymptomFrequency] = Field(default_factory=list)
    symptoms_this_week: int = 0
    average_severity: float = 0.0


class SymptomHistory(BaseModel):
    """Recent symptoms, also grouped by calendar day (YYYY-MM-DD)."""
    symptoms: list[Symptom] = Field(default_factory=list)
    grouped: dict[str, list[Symptom]] = Field(default_factory=dict)


class HealthGraphPoint(BaseModel):
    """One point of the weight/BMI chart."""
    date: str
    weight: float
    bmi: float
    emotional_state: EmotionalState


class SymptomTemplate(BaseModel):
    """Entry of the predefined symptom catalog."""
    symptom_type: SymptomType
    symptom_name: str
    description: str


class UserProfile(BaseModel):
    """
    Registered user.

    ``activity_level`` is the fallback used when the latest health record
    does not state one.
    """
    id: str = Field(default_factory=_new_id)
    email: str = Field(..., min_length=3)
    name: str = Field(..., min_length=1)
    birth_date: Optional[datetime] = None
    height_cm: float = Field(default=0.0, ge=0)
    weight_kg: float = Field(default=0.0, ge=0)
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a minimally well-formed address."""
        local, sep, domain = v.partition('@')
        if not sep or not local or '.' not in domain:
            raise ValueError("Invalid email address")
        return v.lower()


class FoodRecommendation(BaseModel):
    """Food advice entry."""
    category: str
    title: str
    description: str
    foods: list[str] = Field(default_factory=list)
    avoid: list[str] = Field(default_factory=list)
    reason: str = ""

    @property
    def identity_key(self) -> str:
        return self.category


class ExerciseRecommendation(BaseModel):
    """Exercise advice entry."""
    category: str
    title: str
    description: str
    exercises: list[str] = Field(default_factory=list)
    duration: str = ""
    frequency: str = ""
    intensity: str = ""
    reason: str = ""

    @property
    def identity_key(self) -> str:
        return self.category


class EmotionalRecommendation(BaseModel):
    """Emotional wellbeing advice entry, tagged by emotional state."""
    emotional_state: str
    title: str
    description: str
    activities: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    reason: str = ""

    @property
    def identity_key(self) -> str:
        return self.emotional_state


class MealPlan(BaseModel):
    """A single meal slot of a daily menu."""
    meal_type: Literal["breakfast", "lunch", "dinner", "snack"]
    title: str
    foods: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    recipe: str = ""
    calories: str = ""
    description: str = ""
    estimated_cost: str = ""


class DailyMenu(BaseModel):
    """A full day of meals with drink and fruit guidance."""
    date: str
    health_tip: str
    breakfast: MealPlan
    breakfast_alt: list[MealPlan] = Field(default_factory=list)
    lunch: MealPlan
    lunch_alt: list[MealPlan] = Field(default_factory=list)
    dinner: MealPlan
    dinner_alt: list[MealPlan] = Field(default_factory=list)
    snacks: list[MealPlan]
    drinks: list[str]
    fruits: list[str]
    avoid_drinks: list[str] = Field(default_factory=list)
    avoid_fruits: list[str] = Field(default_factory=list)
    total_calories: str
    total_estimated_cost: str = ""


class RecommendationItem(BaseModel):
    """Short dashboard recommendation."""
    type: str
    title: str
    description: str
    priority: Literal["high", "medium", "low"]


class DashboardData(BaseModel):
    """Dashboard summary for a user."""
    latest_health: Optional[HealthSnapshot] = None
    bmi_category: BMICategory
    health_score: int = Field(..., ge=0, le=100)
    total_records: int = Field(..., ge=0)
    recent_symptoms: list[Symptom] = Field(default_factory=list)
    weekly_progress: list[HealthSnapshot] = Field(default_factory=list)
    recommendations: list[RecommendationItem] = Field(default_factory=list)


class EncryptedData(BaseModel):
    """
    Encrypted data with AES-256-GCM.
    """
    ciphertext: bytes = Field(..., description="Encrypted data")
    iv: bytes = Field(..., description="Initialization vector")
    auth_tag: bytes = Field(..., description="GCM authentication tag")
    algorithm: Literal["AES-256-GCM"] = Field(default="AES-256-GCM")
