"""
Pydantic schemas for mood profiles and itinerary options.

Field names are snake_case in Python and camelCase on the wire, which is
what the web client sends and expects (primaryMood, estimatedCost, ...).
"""
from typing import Any, List, Literal, Optional, get_args
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Mood = Literal["Relax", "Energy", "Inspiration", "Calm", "Adventure", "Melancholy", "Joy"]
ItineraryType = Literal["Relax", "Energy", "Inspiration"]

MOODS: tuple = get_args(Mood)
ITINERARY_TYPES: tuple = get_args(ItineraryType)


def _canonical_label(value: Any, labels: tuple) -> Any:
    """Map 'relax' / ' RELAX ' onto 'Relax'; leave unknown values for validation."""
    if isinstance(value, str):
        cleaned = value.strip()
        for label in labels:
            if cleaned.lower() == label.lower():
                return label
    return value


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# MOOD PROFILE
# ============================================================================

class MoodProfile(CamelModel):
    """Emotional state inferred from the user's description"""
    primary_mood: Mood = Field(..., description="Dominant mood", examples=["Relax"])
    intensity: float = Field(..., description="Mood intensity between 0 and 1", examples=[0.7])
    description: str = Field(..., description="Brief explanation of why this mood was chosen")
    suggested_colors: List[str] = Field(..., description="2-3 hex colors that represent this mood")
    spotify_insights: Optional[str] = Field(default=None, description="Listening-history notes, when provided")

    @field_validator("primary_mood", mode="before")
    @classmethod
    def _normalize_mood(cls, value: Any) -> Any:
        return _canonical_label(value, MOODS)

    @field_validator("intensity", mode="before")
    @classmethod
    def _clamp_intensity(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return min(1.0, max(0.0, float(value)))
        return value


class MoodProfileDraft(CamelModel):
    """JSON shape the LLM is asked to produce for mood analysis"""
    primary_mood: Mood
    intensity: float
    description: str
    suggested_colors: List[str]

    @field_validator("primary_mood", mode="before")
    @classmethod
    def _normalize_mood(cls, value: Any) -> Any:
        return _canonical_label(value, MOODS)

    def to_profile(self) -> MoodProfile:
        return MoodProfile(**self.model_dump())


# ============================================================================
# ITINERARIES
# ============================================================================

class ItineraryOptionDraft(CamelModel):
    """Single itinerary option as returned by the LLM"""
    title: str
    type: ItineraryType
    destination: str = Field(..., description="City and Country")
    description: str
    highlights: List[str]
    estimated_cost: str
    flight_details: str
    accommodation_details: str
    food_details: str
    image: str = Field(..., description="Descriptive prompt for an image")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        return _canonical_label(value, ITINERARY_TYPES)


class ItineraryDraft(CamelModel):
    """JSON shape the LLM is asked to produce for itinerary generation"""
    options: List[ItineraryOptionDraft]


class ItineraryOption(CamelModel):
    """Itinerary option sent to the client"""
    id: str = Field(..., examples=["opt-0"])
    title: str
    type: ItineraryType
    destination: str
    description: str
    highlights: List[str] = []
    estimated_cost: str
    flight_details: Optional[str] = None
    accommodation_details: Optional[str] = None
    food_details: Optional[str] = None
    image: str = Field(..., description="Image URL")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        return _canonical_label(value, ITINERARY_TYPES)


class TravelPlan(CamelModel):
    """Mood profile together with the generated itinerary options"""
    mood_profile: MoodProfile
    options: List[ItineraryOption]


# ============================================================================
# PLAN RESOURCE
# ============================================================================

PlanStatus = Literal["scanning", "results", "confirmed", "failed"]


class PlanResponse(CamelModel):
    """Stored plan returned by the /api/plan endpoints"""
    plan_id: str = Field(..., examples=["plan_1a2b3c4d"])
    status: PlanStatus
    budget: Optional[str] = None
    mood_profile: Optional[MoodProfile] = None
    options: List[ItineraryOption] = []
    selected_option_id: Optional[str] = None
    errors: List[str] = []
