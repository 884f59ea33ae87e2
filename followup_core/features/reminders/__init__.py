"""
Reminders feature package.

This vertical slice keeps every layer of follow-up reminder
prioritization co-located: domain models, status classification,
scoring, ranking, insights and polling checks. The module-level
functions below delegate to shared default instances; construct a
StatusClassifier / PriorityService directly for isolated state.
"""

from datetime import datetime

from followup_core.models.domain import Interaction

from .domain.models import (  # noqa: F401
    DEFAULT_URGENCY_CONFIG,
    CategorizedReminders,
    PriorityFactors,
    PriorityGroups,
    ReminderCheck,
    ReminderPriority,
    ReminderStats,
    ReminderStatus,
    UrgencyConfig,
)
from .pipeline.insights.service import insights  # noqa: F401
from .pipeline.polling.service import check_reminders, newly_overdue  # noqa: F401
from .pipeline.ranking.service import (  # noqa: F401
    boost_for_scenario,
    filter_by_minimum_priority,
    group_by_level,
    sort_by_priority,
    top_n,
)
from .pipeline.scoring.service import PriorityService, priority_service
from .pipeline.status.service import StatusCache, StatusClassifier, status_classifier  # noqa: F401


def classify(interaction: Interaction, now: datetime | None = None) -> ReminderStatus:
    return status_classifier.classify(interaction, now)


def classify_all(interactions, now: datetime | None = None) -> CategorizedReminders:
    return status_classifier.classify_all(interactions, now)


def stats(interactions, now: datetime | None = None) -> ReminderStats:
    return status_classifier.stats(interactions, now)


def clear_cache() -> None:
    status_classifier.clear_cache()


def cache_stats() -> dict:
    return status_classifier.cache_stats()


def score_priority(
    interaction, contact, history=(), config=None, now: datetime | None = None
) -> ReminderPriority:
    return priority_service.score_priority(interaction, contact, history, config, now)


def score_all(interactions, contacts, config=None, now: datetime | None = None):
    return priority_service.score_all(interactions, contacts, config, now)


__all__ = [
    "CategorizedReminders",
    "DEFAULT_URGENCY_CONFIG",
    "PriorityFactors",
    "PriorityGroups",
    "PriorityService",
    "ReminderCheck",
    "ReminderPriority",
    "ReminderStats",
    "ReminderStatus",
    "StatusCache",
    "StatusClassifier",
    "UrgencyConfig",
    "boost_for_scenario",
    "cache_stats",
    "check_reminders",
    "classify",
    "classify_all",
    "clear_cache",
    "filter_by_minimum_priority",
    "group_by_level",
    "insights",
    "newly_overdue",
    "score_all",
    "score_priority",
    "sort_by_priority",
    "stats",
    "top_n",
]
