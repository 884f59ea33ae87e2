"""Human-readable explanations of a reminder's priority."""

from __future__ import annotations

from followup_core.features.reminders.domain.models import ReminderPriority

HIGH_RECENCY = 0.8
LOW_RECENCY = 0.3
HIGH_URGENCY = 0.8
FREQUENT_SNOOZE = 0.5

RECENT_CONTACT = "Recent contact, high engagement"
STALE_CONTACT = "Older contact, may need re-engagement"
HIGH_URGENCY_TYPE = "High urgency interaction type"
FREQUENTLY_SNOOZED = "Previously snoozed multiple times"
OVERDUE = "Overdue, immediate attention needed"
DUE_WITHIN_HOUR = "Due within 1 hour"


def insights(priority: ReminderPriority) -> list[str]:
    """
    Explain a priority record.

    Rules are evaluated in a fixed order (recency, urgency, snoozes,
    timing) and each contributes at most one message.
    """
    messages: list[str] = []
    factors = priority.factors

    if factors.recency > HIGH_RECENCY:
        messages.append(RECENT_CONTACT)
    elif factors.recency < LOW_RECENCY:
        messages.append(STALE_CONTACT)

    if factors.urgency > HIGH_URGENCY:
        messages.append(HIGH_URGENCY_TYPE)

    if factors.snooze_history < FREQUENT_SNOOZE:
        messages.append(FREQUENTLY_SNOOZED)

    if priority.status.is_overdue:
        messages.append(OVERDUE)
    elif priority.status.is_due_within_1_hour:
        messages.append(DUE_WITHIN_HOUR)

    return messages
