from datetime import datetime, timedelta

import pytest

from app.services.access_service import resolve_access

NOW = datetime(2025, 3, 10, 12, 0, 0)


@pytest.mark.parametrize("user, access, redirect", [
    ({"status": "trial", "trial_end": NOW + timedelta(hours=1)}, "active", "dashboard"),
    ({"status": "trial", "trial_end": NOW}, "expired", "billing"),
    ({"status": "trial"}, "expired", "billing"),
    ({"status": "approved", "end_date": NOW + timedelta(days=3)}, "active", "dashboard"),
    ({"status": "approved", "end_date": NOW - timedelta(seconds=1)}, "expired", "billing"),
    ({"status": "pending"}, "pending", "pending"),
    ({"status": "denied"}, "denied", "billing"),
    ({"status": "expired"}, "expired", "billing"),
    ({"status": "inactive"}, "no_plan", "billing"),
    ({}, "no_plan", "billing"),
])
def test_resolve_access(user, access, redirect):
    state = resolve_access(user, now=NOW)
    assert state["access"] == access
    assert state["redirect"] == redirect


def test_active_users_have_no_message():
    state = resolve_access({"status": "trial", "trial_end": NOW + timedelta(days=1)}, now=NOW)
    assert state["message"] is None


def test_expired_trial_asks_for_upgrade():
    state = resolve_access({"status": "trial", "trial_end": NOW - timedelta(days=1)}, now=NOW)
    assert state["message"] == "Your trial has ended. Please upgrade."
