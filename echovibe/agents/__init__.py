"""
LangGraph agents package for mood-driven travel planning.

This package contains the state schema, LLM configuration, and agent
implementations for the mood analysis and itinerary generation workflow.
"""

from .state import PlanState, initial_plan_state
from .llm_config import llm_provider, LLMProvider
from .mood import analyze_mood, build_mood_prompt
from .itineraries import generate_itineraries, build_itinerary_prompt, resolve_budget
from .graph import plan_graph, create_plan_graph

__all__ = [
    "PlanState",
    "initial_plan_state",
    "llm_provider",
    "LLMProvider",
    "analyze_mood",
    "build_mood_prompt",
    "generate_itineraries",
    "build_itinerary_prompt",
    "resolve_budget",
    "plan_graph",
    "create_plan_graph",
]
