"""
Reminder status service - classifies interactions into temporal states.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from followup_core.config import settings
from followup_core.features.reminders.domain.models import (
    CategorizedReminders,
    ReminderStats,
    ReminderStatus,
)
from followup_core.infrastructure.observability.logging import get_logger
from followup_core.models.domain import Interaction

logger = get_logger(__name__)

CacheKey = tuple[str, str | None, bool, bool, int]


def resolve_now(now: datetime | None = None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now


def _load_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown reminder timezone, falling back to UTC", timezone=name)
        return UTC


@dataclass(slots=True)
class _CacheEntry:
    status: ReminderStatus
    bucket: int


class StatusCache:
    """
    In-process map of computed statuses keyed by a coarse time bucket.

    Entries from older buckets are evicted as soon as a newer bucket is
    seen, so the map never holds more than one window's worth of results.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, _CacheEntry] = {}
        self._latest_bucket: int | None = None

    def get(self, key: CacheKey) -> ReminderStatus | None:
        entry = self._entries.get(key)
        return entry.status if entry else None

    def put(self, key: CacheKey, status: ReminderStatus) -> None:
        bucket = key[-1]
        if self._latest_bucket is None or bucket > self._latest_bucket:
            self._evict_before(bucket)
            self._latest_bucket = bucket
        self._entries[key] = _CacheEntry(status=status, bucket=bucket)

    def clear(self) -> None:
        size = len(self._entries)
        self._entries.clear()
        self._latest_bucket = None
        logger.debug("Reminder status cache cleared", evicted=size)

    def stats(self) -> dict[str, Any]:
        return {
            "size": len(self._entries),
            "entries": [
                {"key": key, "bucket": entry.bucket} for key, entry in self._entries.items()
            ],
        }

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_before(self, bucket: int) -> None:
        stale = [key for key, entry in self._entries.items() if entry.bucket < bucket]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Reminder status cache rolled over", evicted=len(stale), bucket=bucket)


class StatusClassifier:
    """Computes ReminderStatus for interactions with a read-through cache."""

    def __init__(
        self,
        timezone: str | tzinfo | None = None,
        bucket_seconds: int | None = None,
        due_soon_hours: float | None = None,
        due_within_hours: float | None = None,
        cache: StatusCache | None = None,
    ) -> None:
        defaults = settings.get_classifier_config()
        tz = timezone if timezone is not None else defaults["timezone"]
        self.timezone = _load_timezone(tz) if isinstance(tz, str) else tz
        self.bucket_seconds = max(1, bucket_seconds or defaults["bucket_seconds"])
        self.due_soon_hours = (
            due_soon_hours if due_soon_hours is not None else defaults["due_soon_hours"]
        )
        self.due_within_hours = (
            due_within_hours if due_within_hours is not None else defaults["due_within_hours"]
        )
        self.cache = cache if cache is not None else StatusCache()

    def classify(self, interaction: Interaction, now: datetime | None = None) -> ReminderStatus:
        """
        Get the temporal status of a single interaction.

        Args:
            interaction: Interaction snapshot
            now: Reference time (defaults to the current UTC time)

        Returns:
            ReminderStatus, cached per interaction for the current time bucket
        """
        now = resolve_now(now)
        key = self._cache_key(interaction, now)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        status = self._compute(interaction, now)
        self.cache.put(key, status)
        return status

    def classify_all(
        self, interactions: Iterable[Interaction], now: datetime | None = None
    ) -> CategorizedReminders:
        """
        Partition interactions into disjoint status buckets.

        Due-soon reminders whose due date falls on the current calendar day
        land in ``due_today`` instead of ``due_soon``.
        """
        now = resolve_now(now)
        categorized = CategorizedReminders()

        for interaction in interactions:
            status = self.classify(interaction, now)
            if status.status == "done":
                categorized.done.append(interaction)
            elif status.status == "overdue":
                categorized.overdue.append(interaction)
            elif status.status == "due-soon":
                if status.is_due_today:
                    categorized.due_today.append(interaction)
                else:
                    categorized.due_soon.append(interaction)
            else:
                categorized.upcoming.append(interaction)

        return categorized

    def overdue(
        self, interactions: Iterable[Interaction], now: datetime | None = None
    ) -> list[Interaction]:
        now = resolve_now(now)
        return [i for i in interactions if self.classify(i, now).is_overdue]

    def due_soon(
        self, interactions: Iterable[Interaction], now: datetime | None = None
    ) -> list[Interaction]:
        """Reminders inside the due-soon window that are not yet overdue."""
        now = resolve_now(now)
        result = []
        for interaction in interactions:
            status = self.classify(interaction, now)
            if status.is_due_soon and not status.is_overdue:
                result.append(interaction)
        return result

    def due_today(
        self, interactions: Iterable[Interaction], now: datetime | None = None
    ) -> list[Interaction]:
        now = resolve_now(now)
        return [i for i in interactions if self.classify(i, now).is_due_today]

    @staticmethod
    def active(interactions: Iterable[Interaction]) -> list[Interaction]:
        return [i for i in interactions if i.follow_up_required and not i.is_done]

    def stats(
        self, interactions: Iterable[Interaction], now: datetime | None = None
    ) -> ReminderStats:
        items = list(interactions)
        categorized = self.classify_all(items, now)
        return ReminderStats(
            total=sum(1 for i in items if i.is_reminder),
            overdue=len(categorized.overdue),
            due_soon=len(categorized.due_soon),
            due_today=len(categorized.due_today),
            upcoming=len(categorized.upcoming),
            done=len(categorized.done),
        )

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> dict[str, Any]:
        return self.cache.stats()

    def _cache_key(self, interaction: Interaction, now: datetime) -> CacheKey:
        due = interaction.follow_up_due_date
        return (
            interaction.id,
            due.isoformat() if due else None,
            interaction.is_done,
            interaction.follow_up_required,
            int(now.timestamp() // self.bucket_seconds),
        )

    def _compute(self, interaction: Interaction, now: datetime) -> ReminderStatus:
        if interaction.is_done:
            return ReminderStatus.done()

        due = interaction.follow_up_due_date
        if not interaction.follow_up_required or due is None:
            return ReminderStatus.inactive()

        hours_until_due = (due - now).total_seconds() / 3600
        days_until_due = hours_until_due / 24

        is_overdue = hours_until_due < 0
        # Overdue is a refinement of due-soon, not an exclusion
        is_due_soon = hours_until_due <= self.due_soon_hours
        is_due_today = self._same_local_day(due, now)
        is_due_within_1_hour = 0 <= hours_until_due <= self.due_within_hours

        if is_overdue:
            status = "overdue"
        elif is_due_soon:
            status = "due-soon"
        else:
            status = "upcoming"

        return ReminderStatus(
            is_overdue=is_overdue,
            is_due_soon=is_due_soon,
            is_due_today=is_due_today,
            is_due_within_1_hour=is_due_within_1_hour,
            is_active=True,
            days_until_due=days_until_due,
            hours_until_due=hours_until_due,
            status=status,
        )

    def _same_local_day(self, due: datetime, now: datetime) -> bool:
        try:
            return due.astimezone(self.timezone).date() == now.astimezone(self.timezone).date()
        except OverflowError:
            # Local date past datetime.max or before datetime.min
            return False


status_classifier = StatusClassifier()
