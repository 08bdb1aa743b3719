"""
classify.py — Ignore-reason predicates and the rule-based classifier.

Shared predicates work on a bare model id and read their tables from
``llm_catalog.config``.  Provider adapters combine them with their own
record-level checks into an ordered list of ``Rule`` objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, List, Sequence, TypeVar

from llm_catalog.config import (
    COMMON_IGNORE_KEYWORDS,
    DATE_SNAPSHOT_PATTERNS,
    NON_CHAT_MODEL_PATTERNS,
    OLD_MODEL_PATTERNS,
)
from llm_catalog.models import IgnoreReason

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════════════════════
# Shared predicates
# ══════════════════════════════════════════════════════════════════════════════


def should_ignore_common_keywords(model_id: str) -> bool:
    """True when the id contains a keyword of a non-chat family."""
    ml = model_id.lower()
    return any(k in ml for k in COMMON_IGNORE_KEYWORDS)


def is_non_chat_model(model_id: str) -> bool:
    """Name-shape check for ids the keyword list does not catch.

    Only the last path segment is examined, so ``openai/o3-mini`` and
    ``o3-mini`` are treated alike.  Fine-tuned ids (``ft:``) always match.
    """
    ml = model_id.lower()
    if ml.startswith("ft:"):
        return True
    name = ml.rsplit("/", 1)[-1]
    return any(p.search(name) for p in NON_CHAT_MODEL_PATTERNS)


def is_old_model(model_id: str) -> bool:
    ml = model_id.lower()
    return any(p.search(ml) for p in OLD_MODEL_PATTERNS)


def is_date_snapshot(model_id: str) -> bool:
    """True for dated pins such as ``gpt-4o-2024-05-13`` or ``gpt-4-0314``."""
    return any(p.search(model_id) for p in DATE_SNAPSHOT_PATTERNS)


# ══════════════════════════════════════════════════════════════════════════════
# Classifier
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Rule(Generic[T]):
    reason: IgnoreReason
    applies: Callable[[T], bool]


def id_rule(
    reason: IgnoreReason,
    predicate: Callable[[str], bool],
    extract_id: Callable[[T], str],
) -> Rule[T]:
    """Lift an id predicate to a rule over raw records."""
    return Rule(reason, lambda item: predicate(extract_id(item)))


class Classifier(Generic[T]):
    """Evaluates every rule against a record and collects the reasons that fire.

    There is no short-circuit: a record can carry several reasons at once.
    Reasons come back in rule order, each at most once.
    """

    def __init__(self, rules: Sequence[Rule[T]]) -> None:
        self._rules = list(rules)

    @property
    def reasons(self) -> List[IgnoreReason]:
        return [rule.reason for rule in self._rules]

    def __call__(self, item: T) -> List[IgnoreReason]:
        fired: List[IgnoreReason] = []
        for rule in self._rules:
            if rule.applies(item) and rule.reason not in fired:
                fired.append(rule.reason)
        return fired
