from datetime import datetime, timedelta

from jobspark.achievements.streaks import (
    current_login_streak,
    early_morning_count,
    late_night_count,
    utc_day,
    weekend_activity_count,
)
from jobspark.achievements.types import ActivityEvent
from tests.conftest import NOW

TODAY = NOW.date()


def test_three_consecutive_days_ending_today():
    sessions = [NOW, NOW - timedelta(days=1), NOW - timedelta(days=2)]
    assert current_login_streak('u1', sessions, TODAY) == 3


def test_gap_stops_the_walk():
    sessions = [
        NOW,
        NOW - timedelta(days=1),
        NOW - timedelta(days=2),
        NOW - timedelta(days=4),
        NOW - timedelta(days=5),
    ]
    assert current_login_streak('u1', sessions, TODAY) == 3


def test_no_session_today_means_no_streak():
    sessions = [NOW - timedelta(days=1), NOW - timedelta(days=2)]
    assert current_login_streak('u1', sessions, TODAY) == 0


def test_empty_history():
    assert current_login_streak('u1', [], TODAY) == 0


def test_several_sessions_on_one_day_count_once():
    sessions = [
        NOW.replace(hour=0, minute=1),
        NOW.replace(hour=12),
        NOW.replace(hour=23, minute=59),
        NOW - timedelta(days=1),
    ]
    assert current_login_streak('u1', sessions, TODAY) == 2


def test_naive_datetimes_are_treated_as_utc():
    naive_now = datetime(2026, 2, 7, 0, 30)
    assert utc_day(naive_now) == TODAY
    assert current_login_streak('u1', [naive_now], TODAY) == 1


def test_weekend_activity_count():
    saturday = NOW
    events = [
        ActivityEvent('cv_generated', saturday),
        ActivityEvent('cv_generated', saturday + timedelta(days=1)),  # Sunday
        ActivityEvent('cv_generated', saturday + timedelta(days=2)),  # Monday
        ActivityEvent('job_applied', saturday - timedelta(days=1)),  # Friday
    ]
    assert weekend_activity_count(events) == 2


def test_time_of_day_counts():
    events = [
        ActivityEvent('job_applied', NOW.replace(hour=5, minute=59)),
        ActivityEvent('job_applied', NOW.replace(hour=6)),
        ActivityEvent('job_applied', NOW.replace(hour=22, minute=59)),
        ActivityEvent('job_applied', NOW.replace(hour=23, minute=5)),
    ]
    assert early_morning_count(events) == 1
    assert late_night_count(events) == 1
