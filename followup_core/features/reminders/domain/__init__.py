"""Domain models for the reminders feature."""

from .models import (
    DEFAULT_TAG_WEIGHTS,
    DEFAULT_TYPE_WEIGHTS,
    DEFAULT_URGENCY_CONFIG,
    CategorizedReminders,
    PriorityFactors,
    PriorityGroups,
    PriorityLevel,
    ReminderCheck,
    ReminderPriority,
    ReminderStats,
    ReminderStatus,
    StatusName,
    UrgencyConfig,
)

__all__ = [
    "CategorizedReminders",
    "DEFAULT_TAG_WEIGHTS",
    "DEFAULT_TYPE_WEIGHTS",
    "DEFAULT_URGENCY_CONFIG",
    "PriorityFactors",
    "PriorityGroups",
    "PriorityLevel",
    "ReminderCheck",
    "ReminderPriority",
    "ReminderStats",
    "ReminderStatus",
    "StatusName",
    "UrgencyConfig",
]
