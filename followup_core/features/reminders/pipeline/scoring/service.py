"""
Reminder priority service - ranks open reminders by a composite score.

The score blends three base factors in [0, 1]:

    recency         exp(-age_days / recency_decay_days) of the contact's
                    most recent interaction
    urgency         channel type weight, averaged with the strongest
                    known tag weight when the interaction has one
    snooze_history  (1 - snooze_penalty) ** snooze_count

The mean of the three is scaled to 0-10 and multiplied by the overdue or
due-soon multiplier. The product is divided by the largest configured
multiplier so only the most urgent status can reach 10, then clamped
into [0, 10].
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from followup_core.features.reminders.domain.models import (
    DEFAULT_URGENCY_CONFIG,
    PriorityFactors,
    ReminderPriority,
    ReminderStatus,
    UrgencyConfig,
)
from followup_core.features.reminders.pipeline.status.service import (
    StatusClassifier,
    resolve_now,
    status_classifier,
)
from followup_core.infrastructure.observability.logging import get_logger
from followup_core.models.domain import Contact, Interaction

logger = get_logger(__name__)

MAX_SCORE = 10.0


def clamp_score(score: float) -> float:
    if math.isnan(score):
        return 0.0
    return max(0.0, min(MAX_SCORE, score))


class PriorityService:
    NEUTRAL_TYPE_WEIGHT = 0.5
    NEW_CONTACT_RECENCY = 0.5
    MIN_RECENCY = 0.1
    MIN_SNOOZE_FACTOR = 0.1

    def __init__(self, classifier: StatusClassifier | None = None) -> None:
        self.classifier = classifier or status_classifier

    def score_priority(
        self,
        interaction: Interaction,
        contact: Contact,
        history: Iterable[Interaction] = (),
        config: UrgencyConfig | Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> ReminderPriority:
        """
        Score a single reminder.

        Args:
            interaction: The reminder's interaction snapshot
            contact: Contact the interaction belongs to
            history: Interactions with this contact (others are ignored)
            config: UrgencyConfig or partial override mapping
            now: Reference time (defaults to the current UTC time)

        Returns:
            Fully populated ReminderPriority with a score in [0, 10]
        """
        now = resolve_now(now)
        cfg = self._resolve_config(config)
        status = self.classifier.classify(interaction, now)

        recency = self._recency(contact, history, cfg, now)
        urgency = self._urgency(interaction, cfg)
        snooze_history = self._snooze_history(interaction.snooze_count, cfg)
        overdue_multiplier, due_soon_multiplier = self._multipliers(status, cfg)

        base_score = self._base_score(recency, urgency, snooze_history)
        ceiling = max(1.0, cfg.overdue_multiplier, cfg.due_soon_multiplier)
        score = clamp_score(
            base_score * MAX_SCORE * overdue_multiplier * due_soon_multiplier / ceiling
        )

        return ReminderPriority(
            interaction_id=interaction.id,
            contact_id=contact.id,
            priority_score=score,
            factors=PriorityFactors(
                recency=recency,
                urgency=urgency,
                snooze_history=snooze_history,
                overdue_multiplier=overdue_multiplier,
                due_soon_multiplier=due_soon_multiplier,
            ),
            status=status,
            contact=contact,
            interaction=interaction,
        )

    def score_all(
        self,
        interactions: Iterable[Interaction],
        contacts: Iterable[Contact],
        config: UrgencyConfig | Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> list[ReminderPriority]:
        """
        Score every open reminder whose contact is known, in input order.
        """
        now = resolve_now(now)
        cfg = self._resolve_config(config)
        items = list(interactions)
        contacts_by_id = {contact.id: contact for contact in contacts}

        history_by_contact: dict[str, list[Interaction]] = {}
        for item in items:
            history_by_contact.setdefault(item.contact_id, []).append(item)

        scored = []
        skipped = 0
        for item in items:
            if not item.follow_up_required or item.is_done:
                continue
            contact = contacts_by_id.get(item.contact_id)
            if contact is None:
                skipped += 1
                continue
            scored.append(
                self.score_priority(item, contact, history_by_contact[item.contact_id], cfg, now)
            )

        if skipped:
            logger.debug("Skipped reminders without a known contact", skipped=skipped)
        return scored

    @staticmethod
    def _resolve_config(config: UrgencyConfig | Mapping[str, Any] | None) -> UrgencyConfig:
        if config is None:
            return DEFAULT_URGENCY_CONFIG
        if isinstance(config, UrgencyConfig):
            return config
        return UrgencyConfig.merged(config)

    def _recency(
        self,
        contact: Contact,
        history: Iterable[Interaction],
        config: UrgencyConfig,
        now: datetime,
    ) -> float:
        timestamps = [
            item.created_at
            for item in history
            if item.contact_id == contact.id and item.created_at is not None
        ]
        if not timestamps:
            return self.NEW_CONTACT_RECENCY

        most_recent = max(timestamps)
        age_days = max((now - most_recent).total_seconds() / 86400, 0)
        decay_days = config.recency_decay_days if config.recency_decay_days > 0 else 1.0
        recency = math.exp(-age_days / decay_days)
        return max(self.MIN_RECENCY, min(1.0, recency))

    def _urgency(self, interaction: Interaction, config: UrgencyConfig) -> float:
        type_weight = config.type_weights.get(interaction.type, self.NEUTRAL_TYPE_WEIGHT)

        tag_scores = [
            config.tag_weights[tag] for tag in interaction.tags if tag in config.tag_weights
        ]
        if not tag_scores:
            return type_weight

        # Strongest tag wins; blended so the channel still separates equal tags
        return (type_weight + max(tag_scores)) / 2

    def _snooze_history(self, snooze_count: int, config: UrgencyConfig) -> float:
        penalty = min(max(config.snooze_penalty, 0.0), 1.0)
        factor = (1 - penalty) ** max(snooze_count, 0)
        return max(self.MIN_SNOOZE_FACTOR, factor)

    @staticmethod
    def _multipliers(status: ReminderStatus, config: UrgencyConfig) -> tuple[float, float]:
        overdue_multiplier = config.overdue_multiplier if status.is_overdue else 1.0
        due_soon_multiplier = (
            config.due_soon_multiplier if status.is_due_soon and not status.is_overdue else 1.0
        )
        return overdue_multiplier, due_soon_multiplier

    @staticmethod
    def _base_score(recency: float, urgency: float, snooze_history: float) -> float:
        return (recency + urgency + snooze_history) / 3


priority_service = PriorityService()
