"""
Trial quota enforcement: daily caps, the cumulative message cap and day rollover.
"""

import pytest
from fastapi import HTTPException

from app.services import quota_service
from app.services.quota_service import consume, today_str, usage_summary
from conftest import stored_user


@pytest.mark.asyncio
async def test_first_message_of_the_day_is_counted(db, make_user):
    user = make_user()

    updated = await consume(db, user, "message")

    assert updated["chats_today"] == 1
    assert updated["trial_messages_sent"] == 1
    assert updated["last_chat_date"] == today_str()
    assert stored_user(db, user)["chats_today"] == 1


@pytest.mark.asyncio
async def test_daily_message_cap_returns_429(db, make_user):
    user = make_user(chats_today=10, last_chat_date=today_str(), trial_messages_sent=10)

    with pytest.raises(HTTPException) as exc:
        await consume(db, user, "message")

    assert exc.value.status_code == 429
    assert "Daily Message Limit Reached" in exc.value.detail
    assert stored_user(db, user)["chats_today"] == 10


@pytest.mark.asyncio
async def test_counter_resets_when_day_changes(db, make_user):
    user = make_user(chats_today=10, last_chat_date="2000-01-01", trial_messages_sent=12)

    updated = await consume(db, user, "message")

    assert updated["chats_today"] == 1
    assert updated["trial_messages_sent"] == 13
    assert updated["last_chat_date"] == today_str()


@pytest.mark.asyncio
async def test_thirty_trial_messages_completes_the_trial(db, make_user):
    user = make_user(trial_messages_sent=30)

    with pytest.raises(HTTPException) as exc:
        await consume(db, user, "message")

    assert exc.value.status_code == 429
    assert "Trial Period Completed" in exc.value.detail


@pytest.mark.asyncio
async def test_paid_users_are_not_metered(db, make_user):
    user = make_user(status="approved", chats_today=99, last_chat_date=today_str(), uploads_today=5)

    for kind in ("message", "upload", "package"):
        assert await consume(db, user, kind) == user

    assert stored_user(db, user)["chats_today"] == 99


@pytest.mark.asyncio
async def test_one_upload_per_day(db, make_user):
    user = make_user()

    updated = await consume(db, user, "upload")
    assert updated["uploads_today"] == 1

    with pytest.raises(HTTPException) as exc:
        await consume(db, updated, "upload")
    assert exc.value.status_code == 429
    assert "Daily File Upload Limit" in exc.value.detail


@pytest.mark.asyncio
async def test_stale_document_cannot_take_the_last_unit_twice(db, make_user):
    # Two requests that loaded the user before either one was charged
    user = make_user()

    await consume(db, user, "package")
    with pytest.raises(HTTPException) as exc:
        await consume(db, user, "package")

    assert exc.value.status_code == 429
    assert "Daily Marketing Package Limit" in exc.value.detail
    assert stored_user(db, user)["packages_today"] == 1


@pytest.mark.asyncio
async def test_user_upgraded_mid_request_is_not_charged(db, make_user):
    user = make_user()
    stored_user(db, user)["status"] = "approved"

    result = await consume(db, user, "message")

    assert result["status"] == "approved"
    assert stored_user(db, user)["chats_today"] == 0


def test_usage_summary_for_trial_user(make_user):
    user = make_user(chats_today=4, last_chat_date=today_str(), trial_messages_sent=28, uploads_today=1, last_upload_date="2000-01-01")

    summary = usage_summary(user)

    assert summary["message"]["used"] == 4
    assert summary["message"]["remaining"] == 2
    assert summary["upload"]["used"] == 0
    assert summary["package"]["remaining"] == quota_service.QUOTA_RULES["package"]["daily_limit"]


def test_usage_summary_for_paid_user(make_user):
    summary = usage_summary(make_user(status="approved"))
    assert summary["message"]["limit"] is None
