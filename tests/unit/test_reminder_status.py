import math
from datetime import timedelta

import pytest

from followup_core.features.reminders import cache_stats, classify, clear_cache
from followup_core.features.reminders.pipeline.status.service import (
    StatusCache,
    StatusClassifier,
)


def test_done_reminder_ignores_due_date(classifier, make_interaction, now):
    for due_in in (timedelta(days=-2), timedelta(minutes=30), timedelta(days=5), None):
        status = classifier.classify(make_interaction(due_in=due_in, is_done=True), now)

        assert status.status == "done"
        assert status.is_active is False
        assert not any(
            [status.is_overdue, status.is_due_soon, status.is_due_today, status.is_due_within_1_hour]
        )


@pytest.mark.parametrize(
    "overrides",
    [
        {"follow_up_required": False},
        {"due_in": None},
        {"follow_up_due_date": "garbage"},
    ],
)
def test_missing_due_date_or_follow_up_is_inactive(classifier, make_interaction, now, overrides):
    status = classifier.classify(make_interaction(**overrides), now)

    assert status.status == "upcoming"
    assert status.is_active is False
    assert math.isinf(status.days_until_due)
    assert math.isinf(status.hours_until_due)


@pytest.mark.parametrize("due_in", [timedelta(seconds=-1), timedelta(hours=-5), timedelta(days=-30)])
def test_past_due_date_is_overdue(classifier, make_interaction, now, due_in):
    status = classifier.classify(make_interaction(due_in=due_in), now)

    assert status.is_overdue is True
    assert status.is_due_soon is True
    assert status.status == "overdue"
    assert status.hours_until_due < 0
    assert status.is_active is True


def test_due_exactly_now_is_due_soon_not_overdue(classifier, make_interaction, now):
    status = classifier.classify(make_interaction(due_in=timedelta(0)), now)

    assert status.is_overdue is False
    assert status.is_due_soon is True
    assert status.is_due_within_1_hour is True
    assert status.is_due_today is True
    assert status.status == "due-soon"


def test_due_soon_window_is_inclusive_at_24_hours(classifier, make_interaction, now):
    at_boundary = classifier.classify(make_interaction(due_in=timedelta(hours=24)), now)
    past_boundary = classifier.classify(
        make_interaction(id="later", due_in=timedelta(hours=24, seconds=1)), now
    )

    assert at_boundary.status == "due-soon"
    assert past_boundary.status == "upcoming"
    assert past_boundary.is_due_soon is False


def test_within_one_hour_window(classifier, make_interaction, now):
    inside = classifier.classify(make_interaction(due_in=timedelta(hours=1)), now)
    outside = classifier.classify(make_interaction(id="x", due_in=timedelta(minutes=61)), now)

    assert inside.is_due_within_1_hour is True
    assert outside.is_due_within_1_hour is False


def test_day_and_hour_counts(classifier, make_interaction, now):
    status = classifier.classify(make_interaction(due_in=timedelta(days=3)), now)

    assert status.hours_until_due == pytest.approx(72)
    assert status.days_until_due == pytest.approx(3)
    assert status.status == "upcoming"


def test_due_today_follows_configured_timezone(make_interaction, now):
    # Due 01:00 UTC on the 11th, which is still the 10th in Los Angeles (UTC-7)
    interaction = make_interaction(due_in=timedelta(hours=13))

    utc_status = StatusClassifier(timezone="UTC").classify(interaction, now)
    la_status = StatusClassifier(timezone="America/Los_Angeles").classify(interaction, now)

    assert utc_status.is_due_today is False
    assert la_status.is_due_today is True
    assert utc_status.status == la_status.status == "due-soon"


def test_far_future_due_date_past_local_calendar_is_not_due_today(make_interaction, now):
    # UTC+14 pushes the local date past the last representable day
    interaction = make_interaction(due_in=None, follow_up_due_date="9999-12-31T23:30:00Z")

    status = StatusClassifier(timezone="Pacific/Kiritimati").classify(interaction, now)

    assert status.is_due_today is False
    assert status.is_active is True
    assert status.status == "upcoming"


def test_unknown_timezone_falls_back_to_utc(make_interaction, now):
    classifier = StatusClassifier(timezone="Mars/Olympus_Mons")

    assert classifier.classify(make_interaction(due_in=timedelta(hours=2)), now).is_due_today


def test_classify_all_partitions_disjointly(classifier, make_interaction, now):
    interactions = [
        make_interaction(id="overdue", due_in=timedelta(hours=-3)),
        make_interaction(id="today", due_in=timedelta(hours=2)),
        make_interaction(id="tomorrow", due_in=timedelta(hours=20)),
        make_interaction(id="later", due_in=timedelta(days=4)),
        make_interaction(id="no-date", due_in=None),
        make_interaction(id="done", is_done=True),
    ]

    buckets = classifier.classify_all(interactions, now)

    assert [i.id for i in buckets.overdue] == ["overdue"]
    assert [i.id for i in buckets.due_today] == ["today"]
    assert [i.id for i in buckets.due_soon] == ["tomorrow"]
    assert [i.id for i in buckets.upcoming] == ["later", "no-date"]
    assert [i.id for i in buckets.done] == ["done"]


def test_filters_and_stats(classifier, make_interaction, now):
    interactions = [
        make_interaction(id="overdue", due_in=timedelta(hours=-3)),
        make_interaction(id="today", due_in=timedelta(hours=2)),
        make_interaction(id="tomorrow", due_in=timedelta(hours=20)),
        make_interaction(id="no-date", due_in=None),
        make_interaction(id="done", is_done=True),
        make_interaction(id="note", follow_up_required=False),
    ]

    assert [i.id for i in classifier.overdue(interactions, now)] == ["overdue"]
    assert [i.id for i in classifier.due_soon(interactions, now)] == ["today", "tomorrow"]
    assert [i.id for i in classifier.due_today(interactions, now)] == ["overdue", "today"]
    assert [i.id for i in classifier.active(interactions)] == [
        "overdue",
        "today",
        "tomorrow",
        "no-date",
    ]

    stats = classifier.stats(interactions, now)
    assert stats.total == 4
    assert (stats.overdue, stats.due_today, stats.due_soon) == (1, 1, 1)
    assert stats.upcoming == 2
    assert stats.done == 1


def test_repeated_classify_within_window_is_cached(classifier, make_interaction, now):
    interaction = make_interaction(due_in=timedelta(hours=5))

    first = classifier.classify(interaction, now)
    second = classifier.classify(interaction, now + timedelta(seconds=20))

    assert second == first
    assert second is first
    assert classifier.cache_stats()["size"] == 1


def test_clear_cache_forces_recomputation(classifier, make_interaction, now):
    interaction = make_interaction(due_in=timedelta(hours=5))
    first = classifier.classify(interaction, now)

    classifier.clear_cache()
    assert classifier.cache_stats() == {"size": 0, "entries": []}

    second = classifier.classify(interaction, now)
    assert second == first
    assert second is not first


def test_cache_rolls_over_with_time_bucket(classifier, make_interaction, now):
    interaction = make_interaction(due_in=timedelta(minutes=90))

    before = classifier.classify(interaction, now)
    after = classifier.classify(interaction, now + timedelta(minutes=31))

    assert before.is_due_within_1_hour is False
    assert after.is_due_within_1_hour is True
    stats = classifier.cache_stats()
    assert stats["size"] == 1
    assert stats["entries"][0]["bucket"] == int((now + timedelta(minutes=31)).timestamp() // 60)


def test_cache_key_tracks_done_flag(classifier, make_interaction, now):
    open_status = classifier.classify(make_interaction(), now)
    done_status = classifier.classify(make_interaction(is_done=True), now)

    assert open_status.status == "upcoming"
    assert done_status.status == "done"
    assert classifier.cache_stats()["size"] == 2


def test_classifiers_do_not_share_cache(make_interaction, now):
    a = StatusClassifier()
    b = StatusClassifier()
    a.classify(make_interaction(), now)

    assert len(a.cache) == 1
    assert len(b.cache) == 0


def test_injected_cache_is_used(make_interaction, now):
    cache = StatusCache()
    StatusClassifier(cache=cache).classify(make_interaction(), now)

    assert len(cache) == 1


def test_module_level_helpers_use_shared_classifier(make_interaction, now):
    classify(make_interaction(), now)
    assert cache_stats()["size"] == 1

    clear_cache()
    assert cache_stats()["size"] == 0
