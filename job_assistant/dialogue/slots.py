"""从自由文本中提取槽位。

每个解析函数在未匹配时返回 None 而不抛异常，
缺失槽位的含义由调用方按意图自行决定。
"""

import re
from dataclasses import dataclass
from typing import List, Optional

LOCATION_PATTERN = re.compile(r"\b(in|at|near)\s+([A-Za-z\s]+)", re.IGNORECASE)
SALARY_PATTERN = re.compile(r"(\d+)\s*(lakh|lac|k|thousand)", re.IGNORECASE)
SEARCH_NOISE_PATTERN = re.compile(r"\b(jobs?|job|find|search|show|me|for|in|at|near)\b", re.IGNORECASE)

SALARY_MULTIPLIERS = {
    "lakh": 100_000,
    "lac": 100_000,
    "k": 1_000,
    "thousand": 1_000,
}

COMMON_SKILLS = ("javascript", "python", "react", "node", "java", "developer", "designer", "manager")

FALLBACK_STOP_WORDS = frozenset({"show", "me", "find", "search", "for", "the", "with", "and", "or"})


@dataclass(frozen=True)
class SalarySlot:
    amount: int
    unit: str

    @property
    def value(self) -> int:
        """Amount in the smallest currency unit."""
        return self.amount * SALARY_MULTIPLIERS[self.unit]


def parse_location(message: str) -> Optional[str]:
    match = LOCATION_PATTERN.search(message)
    if not match:
        return None
    location = match.group(2).strip()
    return location or None


def parse_salary(message: str) -> Optional[SalarySlot]:
    match = SALARY_PATTERN.search(message)
    if not match:
        return None
    return SalarySlot(amount=int(match.group(1)), unit=match.group(2).lower())


def parse_skill(message: str) -> Optional[str]:
    lowered = message.lower()
    for skill in COMMON_SKILLS:
        if skill in lowered:
            return skill
    return None


def extract_search_terms(message: str) -> str:
    """Strip search filler words ("show me jobs in ...") and keep the rest."""

    stripped = SEARCH_NOISE_PATTERN.sub("", message)
    return " ".join(stripped.split())


def extract_content_words(message: str) -> List[str]:
    return [
        word
        for word in message.lower().split()
        if len(word) > 3 and word not in FALLBACK_STOP_WORDS
    ]
