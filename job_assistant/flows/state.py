"""State definition for the per-turn LangGraph pipeline."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

from job_assistant.dialogue.keywords import KeywordFlags
from job_assistant.dialogue.query import QueryPlan
from job_assistant.domain.models import JobSummary, Reply


class TurnState(TypedDict, total=False):
    """State shared across turn nodes."""

    message: str
    context: Dict[str, Any]
    flags: Optional[KeywordFlags]
    intent: Optional[str]
    plan: Optional[QueryPlan]
    jobs: List[JobSummary]
    reply: Optional[Reply]
