"""
State schema for the LangGraph plan workflow.

PlanState flows through the mood analyzer and the itinerary generator.
"""

from typing import Any, Dict, List, Optional, TypedDict


class PlanState(TypedDict):
    """
    Main state object that flows through the LangGraph workflow.

    - Mood analyzer: populates mood_profile
    - Itinerary generator: populates options
    """
    # Input
    user_input: Optional[str]
    spotify_data: Optional[Dict[str, Any]]
    budget: str
    plan_id: Optional[str]

    # Mood analyzer output (MoodProfile as camelCase dict)
    mood_profile: Optional[Dict[str, Any]]

    # Itinerary generator output (ItineraryOption dicts)
    options: List[Dict[str, Any]]

    # Metadata
    status: str
    current_agent: Optional[str]
    errors: List[str]


def initial_plan_state(
    user_input: Optional[str],
    budget: str,
    spotify_data: Optional[Dict[str, Any]] = None,
    plan_id: Optional[str] = None,
) -> PlanState:
    """Build an empty state for a new workflow run."""
    return {
        "user_input": user_input,
        "spotify_data": spotify_data,
        "budget": budget,
        "plan_id": plan_id,
        "mood_profile": None,
        "options": [],
        "status": "processing",
        "current_agent": None,
        "errors": [],
    }
