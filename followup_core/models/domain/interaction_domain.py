"""
Read-only snapshots of the contact and interaction records owned by the
upstream contact store.

The store serializes records loosely: timestamps arrive as ISO strings or
datetimes, tags as lists, JSON-encoded strings or comma separated text.
All coercion happens here so the scoring pipeline only ever sees clean
values (aware datetimes or None, and a tuple of lower-cased tags).
"""

import json
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from followup_core.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


def parse_tags(raw: Any) -> tuple[str, ...]:
    """
    Convert loosely typed tag data into a clean tuple of tags.

    Accepts a list/tuple/set of strings, a JSON-encoded list, or a comma
    separated string. Anything else yields an empty tuple. Tags are
    stripped, lower-cased and de-duplicated preserving first occurrence.
    """
    if raw is None:
        return ()

    items: Any = raw
    if isinstance(raw, (bytes, bytearray)):
        try:
            items = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Unparsable interaction tags", raw_type=type(raw).__name__)
            return ()

    if isinstance(items, str):
        text = items.strip()
        if not text:
            return ()
        if text.startswith("["):
            try:
                items = json.loads(text)
            except (ValueError, RecursionError):
                logger.warning("Unparsable interaction tags", raw_type="str")
                return ()
        else:
            items = text.split(",")

    if isinstance(items, (set, frozenset)):
        items = sorted(item for item in items if isinstance(item, str))

    if not isinstance(items, (list, tuple)):
        logger.warning("Unparsable interaction tags", raw_type=type(raw).__name__)
        return ()

    seen: dict[str, None] = {}
    for item in items:
        if not isinstance(item, str):
            continue
        tag = item.strip().lower()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def parse_timestamp(raw: Any) -> datetime | None:
    """
    Convert an ISO-8601 string or datetime into an aware UTC datetime.

    Naive values are taken as UTC. Unparsable input yields None.
    """
    if raw is None or raw == "":
        return None

    if not isinstance(raw, (datetime, str)):
        logger.warning("Unparsable timestamp", raw_type=type(raw).__name__)
        return None

    try:
        if isinstance(raw, datetime):
            value = raw
        else:
            text = raw.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            value = datetime.fromisoformat(text)

        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        # Offsets near year 1 or 9999 can push the UTC value out of range
        return value.astimezone(UTC)
    except (ValueError, OverflowError):
        logger.warning("Unparsable timestamp", raw_type=type(raw).__name__)
        return None


class Contact(BaseModel):
    """Contact snapshot (name and company are display-only here)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )

    id: str
    name: str = ""
    company: str | None = None
    role: str | None = None
    email: str | None = None
    flagged: bool = False
    tags: tuple[str, ...] = ()

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value: Any) -> tuple[str, ...]:
        return parse_tags(value)


class Interaction(BaseModel):
    """Interaction snapshot; a reminder when follow_up_required is set."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )

    id: str
    contact_id: str
    type: str = "email"  # text < email < dm < phone < in_person
    summary: str = ""
    follow_up_required: bool = False
    follow_up_due_date: datetime | None = None
    is_done: bool = False
    tags: tuple[str, ...] = ()
    snooze_count: int = Field(default=0, description="Times this reminder was snoozed")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value: Any) -> tuple[str, ...]:
        return parse_tags(value)

    @field_validator("follow_up_due_date", "created_at", "updated_at", mode="before")
    @classmethod
    def _clean_timestamp(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)

    @field_validator("snooze_count", mode="before")
    @classmethod
    def _clean_snooze_count(cls, value: Any) -> int:
        try:
            count = int(value)
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(count, 0)

    @property
    def is_reminder(self) -> bool:
        return self.follow_up_required and self.follow_up_due_date is not None
