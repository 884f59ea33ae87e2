"""
Domain models for the reminders feature.

These lightweight dataclasses describe the derived, disposable records
the pipeline produces. None of them is persisted; callers rebuild them on
every render pass or polling tick.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Literal

from followup_core.config import settings
from followup_core.infrastructure.observability.logging import get_logger
from followup_core.models.domain import Contact, Interaction

logger = get_logger(__name__)

StatusName = Literal["overdue", "due-soon", "upcoming", "done"]
PriorityLevel = Literal["high", "medium", "low"]

DEFAULT_TYPE_WEIGHTS: dict[str, float] = {
    "email": 0.8,
    "phone": 0.9,
    "text": 0.6,
    "dm": 0.7,
    "in_person": 1.0,
}

DEFAULT_TAG_WEIGHTS: dict[str, float] = {
    "urgent": 1.0,
    "high_priority": 0.9,
    "follow_up": 0.8,
    "interview": 0.95,
    "application": 0.7,
    "networking": 0.6,
    "casual": 0.4,
}


@dataclass(slots=True, frozen=True)
class ReminderStatus:
    """Point-in-time temporal state of one interaction."""

    is_overdue: bool
    is_due_soon: bool
    is_due_today: bool
    is_due_within_1_hour: bool
    is_active: bool
    days_until_due: float
    hours_until_due: float
    status: StatusName

    @classmethod
    def done(cls) -> ReminderStatus:
        return cls(
            is_overdue=False,
            is_due_soon=False,
            is_due_today=False,
            is_due_within_1_hour=False,
            is_active=False,
            days_until_due=math.inf,
            hours_until_due=math.inf,
            status="done",
        )

    @classmethod
    def inactive(cls) -> ReminderStatus:
        return cls(
            is_overdue=False,
            is_due_soon=False,
            is_due_today=False,
            is_due_within_1_hour=False,
            is_active=False,
            days_until_due=math.inf,
            hours_until_due=math.inf,
            status="upcoming",
        )


@dataclass(slots=True)
class UrgencyConfig:
    """Weights and multipliers feeding the priority score."""

    type_weights: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_TYPE_WEIGHTS))
    tag_weights: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_TAG_WEIGHTS))
    overdue_multiplier: float = settings.REMINDER_OVERDUE_MULTIPLIER
    due_soon_multiplier: float = settings.REMINDER_DUE_SOON_MULTIPLIER
    recency_decay_days: float = settings.REMINDER_RECENCY_DECAY_DAYS
    snooze_penalty: float = settings.REMINDER_SNOOZE_PENALTY

    @classmethod
    def merged(
        cls, overrides: Mapping[str, Any] | UrgencyConfig | None = None
    ) -> UrgencyConfig:
        """
        Shallow-merge a partial override over the defaults.

        Args:
            overrides: Mapping keyed by field name, an existing config, or None

        Returns:
            A new UrgencyConfig; unknown keys are ignored
        """
        if overrides is None:
            return cls()
        if isinstance(overrides, UrgencyConfig):
            return replace(overrides)

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in overrides if key not in known)
        if unknown:
            logger.warning("Ignoring unknown urgency config keys", keys=unknown)
        return cls(**{key: value for key, value in overrides.items() if key in known})


DEFAULT_URGENCY_CONFIG = UrgencyConfig()


@dataclass(slots=True, frozen=True)
class PriorityFactors:
    recency: float
    urgency: float
    snooze_history: float
    overdue_multiplier: float
    due_soon_multiplier: float


@dataclass(slots=True, frozen=True)
class ReminderPriority:
    """Composite priority of one open reminder, on a 0-10 scale."""

    interaction_id: str
    contact_id: str
    priority_score: float
    factors: PriorityFactors
    status: ReminderStatus
    contact: Contact
    interaction: Interaction


@dataclass(slots=True)
class CategorizedReminders:
    """Disjoint status buckets produced by classify_all."""

    overdue: list[Interaction] = field(default_factory=list)
    due_soon: list[Interaction] = field(default_factory=list)
    due_today: list[Interaction] = field(default_factory=list)
    upcoming: list[Interaction] = field(default_factory=list)
    done: list[Interaction] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class ReminderStats:
    total: int
    overdue: int
    due_soon: int
    due_today: int
    upcoming: int
    done: int


@dataclass(slots=True, frozen=True)
class ReminderCheck:
    """Result of one polling tick over the current interaction snapshot."""

    current_overdue: list[str]
    newly_overdue: list[str]
    due_soon: list[str]
    due_today: list[str]
    checked_at: datetime


@dataclass(slots=True)
class PriorityGroups:
    high: list[ReminderPriority] = field(default_factory=list)
    medium: list[ReminderPriority] = field(default_factory=list)
    low: list[ReminderPriority] = field(default_factory=list)
