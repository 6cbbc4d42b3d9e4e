"""
API routes for mood analysis, itinerary generation and plan management
"""
import uuid
import logging
from typing import Dict, Optional
from fastapi import APIRouter, BackgroundTasks
from fastapi.responses import JSONResponse
from echovibe.agents.graph import plan_graph
from echovibe.agents.itineraries import generate_itineraries, resolve_budget
from echovibe.agents.mood import analyze_mood
from echovibe.agents.state import PlanState, initial_plan_state
from echovibe.schemas import (
    ItineraryRequest,
    MoodProfile,
    MoodRequest,
    PlanRequest,
    PlanResponse,
    SelectQuoteRequest,
    TravelPlan,
)
from echovibe.tools.mailer import send_quote
from echovibe.utils.exceptions import (
    ConfigurationError,
    EchoVibeError,
    LLMError,
    LLMResponseError,
    MailDeliveryError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["plans"])

# In-memory plan storage, lost on restart. Nothing is ever evicted.
plans_store: Dict[str, PlanResponse] = {}


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error body in the shape the web client reads: {"error": "..."}"""
    return JSONResponse(status_code=status_code, content={"error": message})


def llm_error_response(error: EchoVibeError) -> JSONResponse:
    """Map service errors raised by the agents onto HTTP statuses."""
    if isinstance(error, ConfigurationError):
        return error_response(503, error.message)
    if isinstance(error, (LLMError, LLMResponseError)):
        return error_response(502, error.message)
    return error_response(500, error.message)


def quote_response_body(result) -> dict:
    body = {"success": result.success}
    if result.message:
        body["message"] = result.message
    return body


def generate_plan_id() -> str:
    """Generate unique plan ID"""
    return f"plan_{uuid.uuid4().hex[:8]}"


def _state_to_plan(plan_id: str, budget: str, final_state: PlanState) -> PlanResponse:
    """Convert the workflow's final state into the stored plan."""
    if final_state.get("status") == "error" or final_state.get("errors"):
        return PlanResponse(
            plan_id=plan_id,
            status="failed",
            budget=budget,
            mood_profile=final_state.get("mood_profile"),
            errors=final_state.get("errors") or ["Unknown error"],
        )
    return PlanResponse(
        plan_id=plan_id,
        status="results",
        budget=budget,
        mood_profile=final_state.get("mood_profile"),
        options=final_state.get("options", []),
    )


def run_plan_workflow(
    plan_id: str,
    user_input: Optional[str],
    budget: str,
    spotify_data: Optional[dict] = None
) -> PlanResponse:
    """
    Run the LangGraph workflow and store the resulting plan.

    Called in the background by create_plan and inline by create_plan_sync.
    """
    try:
        logger.info(f"Starting plan workflow for {plan_id}")

        if plan_graph is None:
            raise RuntimeError("LangGraph workflow not initialized")

        initial_state = initial_plan_state(user_input, budget, spotify_data, plan_id)
        final_state = plan_graph.invoke(initial_state)
        plan = _state_to_plan(plan_id, budget, final_state)

        if plan.status == "failed":
            logger.error(f"Plan workflow failed for {plan_id}: {plan.errors}")
        else:
            logger.info(f"Plan workflow completed successfully for {plan_id}")

    except Exception as e:
        error_msg = f"Workflow execution failed: {str(e)}"
        logger.error(f"Error in plan workflow for {plan_id}: {error_msg}", exc_info=True)
        plan = PlanResponse(plan_id=plan_id, status="failed", budget=budget, errors=[error_msg])

    plans_store[plan_id] = plan
    return plan


def _has_mood_input(text: Optional[str], spotify_data: Optional[dict]) -> bool:
    return bool((text and text.strip()) or spotify_data)


@router.post("/mood", response_model=MoodProfile)
def create_mood_profile(request: MoodRequest):
    """
    Analyze a free-text mood description into a mood profile.
    """
    if not _has_mood_input(request.text, request.spotify_data):
        return error_response(400, "Missing mood description")

    try:
        return analyze_mood(request.text, request.spotify_data)
    except EchoVibeError as e:
        return llm_error_response(e)


@router.post("/itineraries", response_model=TravelPlan)
def create_itineraries(request: ItineraryRequest):
    """
    Generate three itinerary options for a mood profile and budget.
    """
    try:
        return generate_itineraries(request.mood_profile, request.budget)
    except EchoVibeError as e:
        return llm_error_response(e)


@router.post("/plan", response_model=PlanResponse)
async def create_plan(request: PlanRequest, background_tasks: BackgroundTasks):
    """
    Start the mood -> itineraries workflow.

    Returns immediately with plan_id and 'scanning' status; poll
    GET /api/plan/{plan_id} for the results.
    """
    if not _has_mood_input(request.text, request.spotify_data):
        return error_response(400, "Missing mood description")

    plan_id = generate_plan_id()
    budget = resolve_budget(request.budget)
    plans_store[plan_id] = PlanResponse(plan_id=plan_id, status="scanning", budget=budget)

    background_tasks.add_task(run_plan_workflow, plan_id, request.text, budget, request.spotify_data)
    logger.info(f"Created plan {plan_id}, workflow queued")

    return plans_store[plan_id]


@router.post("/plan/sync", response_model=PlanResponse)
def create_plan_sync(request: PlanRequest):
    """
    Run the workflow synchronously (for testing/debugging).
    This blocks until both LLM calls have finished.
    """
    if not _has_mood_input(request.text, request.spotify_data):
        return error_response(400, "Missing mood description")

    plan_id = generate_plan_id()
    return run_plan_workflow(plan_id, request.text, resolve_budget(request.budget), request.spotify_data)


@router.get("/plan/{plan_id}", response_model=PlanResponse)
async def get_plan(plan_id: str):
    """
    Get plan details by ID.
    """
    if plan_id not in plans_store:
        return error_response(404, "Plan not found")
    return plans_store[plan_id]


@router.post("/plan/{plan_id}/quote")
def send_plan_quote(plan_id: str, request: SelectQuoteRequest):
    """
    Email the quote for one option of a stored plan and confirm the plan.
    """
    plan = plans_store.get(plan_id)
    if plan is None:
        return error_response(404, "Plan not found")
    if plan.status == "scanning":
        return error_response(409, "Plan is still being generated. Please wait.")
    if plan.status == "failed":
        return error_response(409, "Plan generation failed")
    if not request.email:
        return error_response(400, "Missing email")

    option = next((o for o in plan.options if o.id == request.option_id), None)
    if option is None:
        return error_response(404, "Option not found")

    try:
        result = send_quote(request.email, option, plan.mood_profile)
    except MailDeliveryError as e:
        logger.error(f"Quote email failed for {plan_id}: {e.message}")
        return error_response(500, "Failed to send email")

    plans_store[plan_id] = plan.model_copy(
        update={"status": "confirmed", "selected_option_id": option.id}
    )
    logger.info(f"Plan {plan_id} confirmed with {option.id}")
    return quote_response_body(result)
