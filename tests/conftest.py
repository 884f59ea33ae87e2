from datetime import UTC, datetime, timedelta

import pytest

from followup_core.features.reminders import status_classifier
from followup_core.features.reminders.pipeline.scoring.service import PriorityService
from followup_core.features.reminders.pipeline.status.service import StatusClassifier
from followup_core.models.domain import Contact, Interaction

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    return NOW


@pytest.fixture(autouse=True)
def reset_shared_cache():
    status_classifier.clear_cache()
    yield
    status_classifier.clear_cache()


@pytest.fixture
def classifier():
    return StatusClassifier(timezone="UTC", bucket_seconds=60)


@pytest.fixture
def priority(classifier):
    return PriorityService(classifier=classifier)


@pytest.fixture
def make_interaction(now):
    def _make(due_in: timedelta | None = timedelta(days=3), **overrides):
        data = {
            "id": "interaction-1",
            "contact_id": "contact-1",
            "type": "email",
            "summary": "Follow up on application",
            "follow_up_required": True,
            "follow_up_due_date": now + due_in if due_in is not None else None,
            "is_done": False,
            "tags": [],
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return Interaction(**data)

    return _make


@pytest.fixture
def make_contact():
    def _make(**overrides):
        data = {"id": "contact-1", "name": "Jordan Lee", "company": "Acme Corp"}
        data.update(overrides)
        return Contact(**data)

    return _make
