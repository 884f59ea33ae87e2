"""
Ranking helpers over scored reminders.

All functions are pure: they return new lists or records and never
mutate their input.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Literal

from followup_core.features.reminders.domain.models import (
    PriorityGroups,
    PriorityLevel,
    ReminderPriority,
)
from followup_core.features.reminders.pipeline.scoring.service import clamp_score

Scenario = Literal["interview", "application", "networking", "urgent"]

HIGH_PRIORITY_THRESHOLD = 7.0
MEDIUM_PRIORITY_THRESHOLD = 4.0
DEFAULT_TOP_N = 10
DEFAULT_MINIMUM_PRIORITY = 5.0

SCENARIO_BOOSTS: dict[str, float] = {
    "interview": 1.5,
    "application": 1.3,
    "networking": 1.2,
    "urgent": 2.0,
}


def sort_by_priority(reminders: Iterable[ReminderPriority]) -> list[ReminderPriority]:
    """Highest score first; ties keep their input order."""
    return sorted(reminders, key=lambda r: r.priority_score, reverse=True)


def top_n(reminders: Iterable[ReminderPriority], n: int = DEFAULT_TOP_N) -> list[ReminderPriority]:
    if n <= 0:
        return []
    return sort_by_priority(reminders)[:n]


def filter_by_minimum_priority(
    reminders: Iterable[ReminderPriority], threshold: float = DEFAULT_MINIMUM_PRIORITY
) -> list[ReminderPriority]:
    """
    Keep reminders scoring at or above ``threshold``, in input order.

    Scores are divided by the largest status multiplier, so with the default
    multipliers an upcoming reminder tops out at 10 / 2.0 = 5.0. The default
    threshold therefore keeps overdue and due-soon reminders and only the
    strongest upcoming ones; pass a lower threshold to surface upcoming work.
    """
    return [r for r in reminders if r.priority_score >= threshold]


def priority_level(score: float) -> PriorityLevel:
    if score >= HIGH_PRIORITY_THRESHOLD:
        return "high"
    if score >= MEDIUM_PRIORITY_THRESHOLD:
        return "medium"
    return "low"


def group_by_level(reminders: Iterable[ReminderPriority]) -> PriorityGroups:
    """
    Bucket reminders into high (>= 7), medium (>= 4) and low.

    Every reminder lands in exactly one bucket, in input order.
    """
    groups = PriorityGroups()
    for reminder in reminders:
        getattr(groups, priority_level(reminder.priority_score)).append(reminder)
    return groups


def boost_for_scenario(priority: ReminderPriority, scenario: Scenario | str) -> ReminderPriority:
    """
    Return a copy with score and urgency scaled for a named scenario.

    Unknown scenarios leave the values unchanged. The score is capped at
    10 and the urgency factor at 1.0.
    """
    boost = SCENARIO_BOOSTS.get(scenario, 1.0)
    factors = replace(priority.factors, urgency=min(1.0, priority.factors.urgency * boost))
    return replace(
        priority,
        priority_score=clamp_score(priority.priority_score * boost),
        factors=factors,
    )
