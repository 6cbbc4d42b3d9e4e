"""
Pydantic schemas for API request bodies
"""
from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator

from .travel import CamelModel, MoodProfile


class MoodRequest(CamelModel):
    """Request body for mood analysis"""
    text: Optional[str] = Field(
        default=None,
        description="Free-text description of how the user feels",
        examples=["Sono stanco, ho bisogno di mare e silenzio"]
    )
    spotify_data: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Optional listening-history payload forwarded to the model"
    )


class ItineraryRequest(CamelModel):
    """Request body for itinerary generation"""
    mood_profile: MoodProfile
    budget: Optional[str] = Field(default=None, examples=["500 - 1500€"])


class PlanRequest(CamelModel):
    """Request body for the full mood -> itineraries workflow"""
    text: Optional[str] = None
    spotify_data: Optional[Dict[str, Any]] = None
    budget: Optional[str] = Field(default=None, examples=["1500 - 3000€"])


class QuoteItinerary(CamelModel):
    """Itinerary as echoed back by the client for a quote.

    Only the destination is needed (it goes in the subject); the mail
    template fills in anything else that is missing.
    """
    destination: str
    id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    highlights: List[str] = []
    estimated_cost: Optional[str] = None
    flight_details: Optional[str] = None
    accommodation_details: Optional[str] = None
    food_details: Optional[str] = None
    image: Optional[str] = None

    @field_validator("highlights", mode="before")
    @classmethod
    def _null_highlights(cls, value: Any) -> Any:
        return [] if value is None else value


class QuoteMoodProfile(CamelModel):
    """Mood profile as echoed back by the client; only the mood name is used"""
    primary_mood: Optional[str] = None


class SendQuoteRequest(CamelModel):
    """Request body for emailing a quote.

    Fields are optional so the handler can answer 400 instead of 422.
    """
    email: Optional[str] = Field(default=None, examples=["viaggiatore@example.com"])
    itinerary: Optional[QuoteItinerary] = None
    mood_profile: Optional[QuoteMoodProfile] = None


class SelectQuoteRequest(CamelModel):
    """Request body for emailing one option of a stored plan"""
    email: Optional[str] = None
    option_id: str = Field(..., examples=["opt-1"])
