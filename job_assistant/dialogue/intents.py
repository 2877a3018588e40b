"""基于有序规则表的意图识别。

各意图之间会重叠（"hello, show me jobs" 既是问候也是搜索），
因此规则在 ``INTENT_RULES`` 中的位置就是优先级：按顺序扫描，
返回第一条条件成立的规则对应的意图。
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple

from job_assistant.dialogue.keywords import KeywordFlags, contains_any
from job_assistant.domain.models import Context, Intent

# (lower-cased message, flags, context) -> bool
Predicate = Callable[[str, KeywordFlags, Mapping], bool]


@dataclass(frozen=True)
class IntentRule:
    intent: Intent
    predicate: Predicate


def _mentions(*terms: str) -> Predicate:
    return lambda text, flags, context: contains_any(text, terms)


INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule("greeting", _mentions("hello", "hi", "hey")),
    IntentRule(
        "job_search",
        lambda text, flags, context: flags.is_job_query or contains_any(text, ("show", "find", "search")),
    ),
    IntentRule(
        "location_query",
        lambda text, flags, context: flags.has_location or contains_any(text, ("remote", "onsite")),
    ),
    IntentRule("salary_query", _mentions("salary", "pay", "compensation")),
    IntentRule("apply_help", _mentions("apply", "application", "submit")),
    IntentRule("profile_help", _mentions("profile", "resume", "cv")),
    IntentRule("skills_query", _mentions("skill", "requirement", "qualification")),
    IntentRule("help", _mentions("help", "support")),
    IntentRule("thanks", _mentions("thank")),
    IntentRule("goodbye", _mentions("bye", "goodbye")),
    IntentRule("fallback", lambda text, flags, context: True),
)


class IntentResolver:
    """First-match-wins scan over an ordered rule table."""

    def __init__(self, rules: Optional[Iterable[IntentRule]] = None):
        self._rules: Sequence[IntentRule] = tuple(rules if rules is not None else INTENT_RULES)

    def resolve(self, message: str, flags: KeywordFlags, context: Optional[Context] = None) -> Intent:
        text = message.lower().strip()
        ctx = context or {}
        for rule in self._rules:
            if rule.predicate(text, flags, ctx):
                return rule.intent
        return "fallback"


def with_rule(rule: IntentRule, before: Intent, rules: Sequence[IntentRule] = INTENT_RULES) -> Tuple[IntentRule, ...]:
    """Return a copy of ``rules`` with ``rule`` inserted ahead of ``before``."""

    out = []
    inserted = False
    for existing in rules:
        if not inserted and existing.intent == before:
            out.append(rule)
            inserted = True
        out.append(existing)
    if not inserted:
        raise KeyError(f"Unknown intent in rule table: {before!r}")
    return tuple(out)


_default_resolver = IntentResolver()


def resolve_intent(message: str, flags: KeywordFlags, context: Optional[Context] = None) -> Intent:
    return _default_resolver.resolve(message, flags, context)
