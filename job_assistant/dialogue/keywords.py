"""为用户消息打上粗粒度的话题标记（职位 / 地点 / 技能）。"""

from dataclasses import dataclass
from typing import Iterable

JOB_KEYWORDS = ("job", "position", "vacancy", "role", "opportunity", "career", "hiring")
LOCATION_KEYWORDS = ("location", "city", "remote", "onsite", "hybrid", "in", "at")
SKILL_KEYWORDS = ("skill", "technology", "language", "framework", "experience", "expertise")


@dataclass(frozen=True)
class KeywordFlags:
    is_job_query: bool = False
    has_location: bool = False
    has_skills: bool = False


def contains_any(text: str, terms: Iterable[str]) -> bool:
    """Substring containment, not tokenized: "hiring" matches inside "rehiring"."""

    return any(term in text for term in terms)


def extract_keywords(message: str) -> KeywordFlags:
    lowered = message.lower()
    return KeywordFlags(
        is_job_query=contains_any(lowered, JOB_KEYWORDS),
        has_location=contains_any(lowered, LOCATION_KEYWORDS),
        has_skills=contains_any(lowered, SKILL_KEYWORDS),
    )
