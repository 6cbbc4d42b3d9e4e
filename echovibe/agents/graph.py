"""
LangGraph workflow for mood-driven travel planning.

mood_analyzer -> itinerary_generator -> END, with generation skipped when
mood analysis fails.
"""

from langgraph.graph import StateGraph, END
from .state import PlanState
from .mood import mood_analyzer_node
from .itineraries import itinerary_generator_node
import logging

logger = logging.getLogger(__name__)


def route_after_mood(state: PlanState) -> str:
    """Continue to itinerary generation only when a mood profile exists."""
    if state.get("status") == "error" or not state.get("mood_profile"):
        return "end"
    return "itinerary_generator"


def create_plan_graph():
    """
    Create the LangGraph workflow for plan generation.

    Returns:
        Compiled LangGraph application
    """
    logger.info("Creating LangGraph workflow for plan generation")

    workflow = StateGraph(PlanState)

    workflow.add_node("mood_analyzer", mood_analyzer_node)
    workflow.add_node("itinerary_generator", itinerary_generator_node)

    workflow.set_entry_point("mood_analyzer")
    workflow.add_conditional_edges(
        "mood_analyzer",
        route_after_mood,
        {"itinerary_generator": "itinerary_generator", "end": END},
    )
    workflow.add_edge("itinerary_generator", END)

    app = workflow.compile()
    logger.info("LangGraph plan workflow compiled successfully")
    return app


# Global graph instance
try:
    plan_graph = create_plan_graph()
    logger.info("Global plan_graph instance created")
except Exception as e:
    logger.error(f"Failed to create plan_graph: {e}")
    plan_graph = None
