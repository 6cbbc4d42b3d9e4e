"""
Pydantic schemas for the EchoVibe API
"""
from .travel import (
    MOODS,
    ITINERARY_TYPES,
    Mood,
    ItineraryType,
    MoodProfile,
    MoodProfileDraft,
    ItineraryOptionDraft,
    ItineraryDraft,
    ItineraryOption,
    TravelPlan,
    PlanResponse,
)
from .requests import (
    MoodRequest,
    ItineraryRequest,
    PlanRequest,
    QuoteItinerary,
    QuoteMoodProfile,
    SendQuoteRequest,
    SelectQuoteRequest,
)

__all__ = [
    "MOODS",
    "ITINERARY_TYPES",
    "Mood",
    "ItineraryType",
    # LLM response shapes
    "MoodProfileDraft",
    "ItineraryOptionDraft",
    "ItineraryDraft",
    # API response models
    "MoodProfile",
    "ItineraryOption",
    "TravelPlan",
    "PlanResponse",
    # API request models
    "MoodRequest",
    "ItineraryRequest",
    "PlanRequest",
    "QuoteItinerary",
    "QuoteMoodProfile",
    "SendQuoteRequest",
    "SelectQuoteRequest",
]
