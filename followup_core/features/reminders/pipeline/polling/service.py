"""
Reminder polling check - diffs successive overdue snapshots.

Scheduling the ticks is the caller's job; this module only answers
"what changed since the previous tick".
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from followup_core.features.reminders.domain.models import ReminderCheck
from followup_core.features.reminders.pipeline.status.service import (
    StatusClassifier,
    resolve_now,
    status_classifier,
)
from followup_core.infrastructure.observability.logging import log_reminder_check
from followup_core.models.domain import Interaction


def newly_overdue(current_ids: Iterable[str], previous_ids: Iterable[str]) -> list[str]:
    previous = set(previous_ids)
    return [reminder_id for reminder_id in current_ids if reminder_id not in previous]


def check_reminders(
    interactions: Iterable[Interaction],
    previous_overdue_ids: Iterable[str] = (),
    now: datetime | None = None,
    classifier: StatusClassifier | None = None,
) -> ReminderCheck:
    """
    Categorize the current snapshot and report reminders that became overdue.

    Args:
        interactions: Current interaction snapshot
        previous_overdue_ids: Overdue ids reported by the previous check
        now: Reference time (defaults to the current UTC time)
        classifier: Classifier to use (defaults to the shared instance)

    Returns:
        ReminderCheck with id lists for the overdue, due-soon and due-today buckets
    """
    classifier = classifier or status_classifier
    now = resolve_now(now)
    items = list(interactions)
    categorized = classifier.classify_all(items, now)

    current_overdue = [i.id for i in categorized.overdue]
    fresh = newly_overdue(current_overdue, previous_overdue_ids)
    log_reminder_check(checked=len(items), overdue=len(current_overdue), newly_overdue=fresh)

    return ReminderCheck(
        current_overdue=current_overdue,
        newly_overdue=fresh,
        due_soon=[i.id for i in categorized.due_soon],
        due_today=[i.id for i in categorized.due_today],
        checked_at=now,
    )
