"""LangGraph construction and node implementations for one dialogue turn.

extract_keywords -> resolve_intent -> plan_query -> [search_catalog] -> compose_reply -> END
"""

from __future__ import annotations

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from job_assistant.dialogue.composer import ResponseComposer
from job_assistant.dialogue.intents import IntentResolver
from job_assistant.dialogue.keywords import extract_keywords
from job_assistant.dialogue.query import JobQueryBuilder, NO_QUERY
from job_assistant.flows.state import TurnState


def extract_node(state: TurnState) -> TurnState:
    return {"flags": extract_keywords(state["message"])}


def resolve_node(state: TurnState, resolver: IntentResolver) -> TurnState:
    intent = resolver.resolve(state["message"], state["flags"], state.get("context") or {})
    return {"intent": intent}


def plan_node(state: TurnState, builder: JobQueryBuilder) -> TurnState:
    return {"plan": builder.plan(state["intent"], state["message"]), "jobs": []}


def search_node(state: TurnState, builder: JobQueryBuilder) -> TurnState:
    return {"jobs": builder.search(state["plan"].query)}


def compose_node(state: TurnState, composer: ResponseComposer) -> TurnState:
    reply = composer.compose(
        state["intent"],
        state.get("plan") or NO_QUERY,
        state.get("jobs") or [],
        state.get("context") or {},
    )
    return {"reply": reply}


def plan_router(state: TurnState) -> str:
    plan = state.get("plan")
    if plan is not None and plan.query is not None:
        return "search"
    return "compose"


def build_turn_graph(
    resolver: IntentResolver,
    builder: JobQueryBuilder,
    composer: ResponseComposer,
) -> CompiledStateGraph:
    # node names must not collide with TurnState keys
    graph = StateGraph(TurnState)
    graph.add_node("extract_keywords", extract_node)
    graph.add_node("resolve_intent", lambda s: resolve_node(s, resolver))
    graph.add_node("plan_query", lambda s: plan_node(s, builder))
    graph.add_node("search_catalog", lambda s: search_node(s, builder))
    graph.add_node("compose_reply", lambda s: compose_node(s, composer))
    graph.set_entry_point("extract_keywords")
    graph.add_edge("extract_keywords", "resolve_intent")
    graph.add_edge("resolve_intent", "plan_query")
    graph.add_conditional_edges(
        "plan_query",
        plan_router,
        {"search": "search_catalog", "compose": "compose_reply"},
    )
    graph.add_edge("search_catalog", "compose_reply")
    graph.add_edge("compose_reply", END)
    return graph.compile()
