"""
Mood analyzer agent.

Turns the user's free-text description (and optional listening data) into a
MoodProfile by asking the LLM for a JSON object of a declared shape.
"""

from langchain_core.messages import SystemMessage, HumanMessage
from .state import PlanState
from .llm_config import llm_provider
from .json_output import parse_json_response, schema_text
from echovibe.schemas import MOODS, MoodProfile, MoodProfileDraft
from echovibe.utils.exceptions import EchoVibeError
import json
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

MOOD_SYSTEM_PROMPT = """You are an emotional-intelligence assistant for a travel studio.
You read how a person describes their current state and classify it for travel planning.
Return ONLY a JSON object, no additional text or explanation."""

MOOD_PROMPT_TEMPLATE = """Analyze the following user input and determine their current emotional state for travel planning.
User Text: {text}
Spotify Data: {spotify}

Return a JSON object with:
- primaryMood: One of {moods}
- intensity: A number between 0 and 1
- description: A brief explanation of why this mood was chosen.
- suggestedColors: An array of 2-3 hex colors that represent this mood.

The JSON must match this schema:
{schema}
"""


def build_mood_prompt(text: Optional[str] = None, spotify_data: Optional[Dict[str, Any]] = None) -> str:
    """
    Serialize the user's input into the mood analysis prompt.

    Missing values are written as "None" so the model sees every slot.
    """
    return MOOD_PROMPT_TEMPLATE.format(
        text=text or "None",
        spotify=json.dumps(spotify_data, ensure_ascii=False) if spotify_data else "None",
        moods=", ".join(f"'{m}'" for m in MOODS),
        schema=schema_text(MoodProfileDraft),
    )


def analyze_mood(text: Optional[str] = None, spotify_data: Optional[Dict[str, Any]] = None) -> MoodProfile:
    """
    Derive a mood profile from the user's description.

    Args:
        text: Free-text mood description
        spotify_data: Optional listening-history payload

    Returns:
        Validated MoodProfile

    Raises:
        ConfigurationError: No LLM provider configured
        LLMError: The model call failed
        LLMResponseError: The reply did not match the declared shape
    """
    messages = [
        SystemMessage(content=MOOD_SYSTEM_PROMPT),
        HumanMessage(content=build_mood_prompt(text, spotify_data)),
    ]

    logger.info("Invoking LLM to analyze mood")
    response = llm_provider.invoke_with_fallback(messages)
    profile = parse_json_response(response, MoodProfileDraft).to_profile()

    logger.info(f"Mood analyzed: {profile.primary_mood} (intensity {profile.intensity:.2f})")
    return profile


def mood_analyzer_node(state: PlanState) -> PlanState:
    """
    Mood analyzer agent: populate state["mood_profile"] from user input.

    Errors are recorded on the state instead of raised so the graph can stop
    cleanly.
    """
    logger.info("Mood analyzer agent starting")
    state["current_agent"] = "mood_analyzer"

    try:
        profile = analyze_mood(state.get("user_input"), state.get("spotify_data"))
        state["mood_profile"] = profile.model_dump(by_alias=True)
        state["status"] = "mood_complete"
        return state

    except EchoVibeError as e:
        logger.error(f"Mood analysis failed: {e.message}")
        state["errors"].append(f"Mood analysis error: {e.message}")
        state["status"] = "error"
        return state

    except Exception as e:
        error_msg = f"Mood analyzer agent failed: {str(e)}"
        logger.error(error_msg, exc_info=True)
        state["errors"].append(error_msg)
        state["status"] = "error"
        return state
