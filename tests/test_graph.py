from echovibe.agents.graph import create_plan_graph, route_after_mood
from echovibe.agents.state import initial_plan_state

from conftest import ITINERARY_REPLY, MOOD_REPLY


def test_route_after_mood():
    state = initial_plan_state("ciao", "Standard")
    assert route_after_mood(state) == "end"

    state["mood_profile"] = {"primaryMood": "Joy"}
    state["status"] = "mood_complete"
    assert route_after_mood(state) == "itinerary_generator"

    state["status"] = "error"
    assert route_after_mood(state) == "end"


def test_workflow_runs_both_agents(fake_llm):
    fake_llm.queue(MOOD_REPLY, ITINERARY_REPLY)
    graph = create_plan_graph()

    final_state = graph.invoke(initial_plan_state("Mi sento scarico", "500 - 1500€"))

    assert final_state["status"] == "completed"
    assert final_state["errors"] == []
    assert final_state["mood_profile"]["primaryMood"] == "Relax"
    assert len(final_state["options"]) == 3
    assert len(fake_llm.calls) == 2


def test_workflow_stops_after_failed_mood(fake_llm):
    fake_llm.queue("garbage")
    graph = create_plan_graph()

    final_state = graph.invoke(initial_plan_state("Mi sento scarico", "500 - 1500€"))

    assert final_state["status"] == "error"
    assert final_state["options"] == []
    assert len(fake_llm.calls) == 1
