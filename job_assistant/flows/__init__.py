"""LangGraph rendition of the single-turn dialogue pipeline."""

from job_assistant.flows.graph import build_turn_graph
from job_assistant.flows.state import TurnState

__all__ = ["build_turn_graph", "TurnState"]
