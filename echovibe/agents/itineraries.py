"""
Itinerary generator agent.

Asks the LLM for three travel options (Relax, Energy, Inspiration) that fit
a mood profile and a budget, then attaches ids and placeholder image URLs.
"""

from langchain_core.messages import SystemMessage, HumanMessage
from .state import PlanState
from .llm_config import llm_provider
from .json_output import parse_json_response, schema_text
from echovibe.schemas import (
    ItineraryDraft,
    ItineraryOption,
    ItineraryOptionDraft,
    MoodProfile,
    TravelPlan,
)
from echovibe.tools.links import build_image_url
from echovibe.utils.config import settings
from echovibe.utils.exceptions import EchoVibeError
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

EXPECTED_OPTIONS = 3
CUSTOM_BUDGET = "custom"
FALLBACK_BUDGET = "Standard"

ITINERARY_SYSTEM_PROMPT = """You are a travel designer for EchoVibe Studio.
You design realistic trips that match a traveller's emotional state and budget.
Return ONLY a JSON object, no additional text or explanation."""

ITINERARY_PROMPT_TEMPLATE = """Based on the following mood profile and budget, generate 3 distinct travel itinerary options.
Mood: {mood} ({description})
Intensity: {intensity}
Budget Range: {budget}

The 3 options should be categorized as:
1. "Relax": Focus on recovery and peace.
2. "Energy": Focus on activity and excitement.
3. "Inspiration": Focus on culture, art, and new perspectives.

For each option, provide:
- title: A catchy name.
- type: The category ("Relax", "Energy" or "Inspiration").
- destination: City and Country.
- description: Why it fits the mood.
- highlights: 3 key activities.
- estimatedCost: A string representing the cost.
- flightDetails: Realistic flight information (e.g., "Volo A/R da Roma, 2h 30m").
- accommodationDetails: Realistic accommodation info (e.g., "Boutique Hotel 4* in centro").
- foodDetails: Realistic food/dining info based on the destination (e.g., "Colazione inclusa, cena tipica in taverna").
- image: A descriptive prompt for an image (e.g., "A serene beach in Bali at sunset").

The JSON must match this schema:
{schema}
"""


def resolve_budget(budget: Optional[str]) -> str:
    """
    Normalize the budget sent by the client.

    None means the client sent nothing, so the default range applies. The
    "custom" sentinel or a blank custom value falls back to "Standard".
    """
    if budget is None:
        return settings.default_budget
    cleaned = budget.strip()
    if not cleaned or cleaned.lower() == CUSTOM_BUDGET:
        return FALLBACK_BUDGET
    return cleaned


def build_itinerary_prompt(profile: MoodProfile, budget: str) -> str:
    """Serialize the mood profile and budget into the itinerary prompt."""
    return ITINERARY_PROMPT_TEMPLATE.format(
        mood=profile.primary_mood,
        description=profile.description,
        intensity=profile.intensity,
        budget=budget,
        schema=schema_text(ItineraryDraft),
    )


def finalize_options(drafts: List[ItineraryOptionDraft]) -> List[ItineraryOption]:
    """Attach sequential ids and swap the image prompt for a placeholder URL."""
    options = []
    for index, draft in enumerate(drafts):
        data = draft.model_dump()
        data["id"] = f"opt-{index}"
        data["image"] = build_image_url(draft.destination)
        options.append(ItineraryOption(**data))
    return options


def generate_itineraries(profile: MoodProfile, budget: Optional[str] = None) -> TravelPlan:
    """
    Generate itinerary options for a mood profile.

    Args:
        profile: Mood profile from analyze_mood
        budget: Budget range as chosen by the user

    Returns:
        TravelPlan carrying the profile and the finalized options

    Raises:
        ConfigurationError: No LLM provider configured
        LLMError: The model call failed
        LLMResponseError: The reply did not match the declared shape
    """
    budget = resolve_budget(budget)
    messages = [
        SystemMessage(content=ITINERARY_SYSTEM_PROMPT),
        HumanMessage(content=build_itinerary_prompt(profile, budget)),
    ]

    logger.info(f"Invoking LLM to generate itineraries for {profile.primary_mood}, budget {budget}")
    response = llm_provider.invoke_with_fallback(messages)
    draft = parse_json_response(response, ItineraryDraft)

    if len(draft.options) != EXPECTED_OPTIONS:
        logger.warning(f"Expected {EXPECTED_OPTIONS} itinerary options, got {len(draft.options)}")

    options = finalize_options(draft.options)
    logger.info(f"Generated {len(options)} itinerary options: {[o.destination for o in options]}")
    return TravelPlan(mood_profile=profile, options=options)


def itinerary_generator_node(state: PlanState) -> PlanState:
    """
    Itinerary generator agent: populate state["options"] from the mood profile.
    """
    logger.info("Itinerary generator agent starting")
    state["current_agent"] = "itinerary_generator"

    if not state.get("mood_profile"):
        error_msg = "Cannot generate itineraries without a mood profile"
        logger.error(error_msg)
        state["errors"].append(error_msg)
        state["status"] = "error"
        return state

    try:
        profile = MoodProfile.model_validate(state["mood_profile"])
        plan = generate_itineraries(profile, state.get("budget"))
        state["options"] = [option.model_dump(by_alias=True) for option in plan.options]
        state["status"] = "completed"
        return state

    except EchoVibeError as e:
        logger.error(f"Itinerary generation failed: {e.message}")
        state["errors"].append(f"Itinerary generation error: {e.message}")
        state["status"] = "error"
        return state

    except Exception as e:
        error_msg = f"Itinerary generator agent failed: {str(e)}"
        logger.error(error_msg, exc_info=True)
        state["errors"].append(error_msg)
        state["status"] = "error"
        return state
