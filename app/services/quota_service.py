# app/services/quota_service.py

import logging
from datetime import datetime
from typing import Optional
from fastapi import HTTPException, status
from pymongo import ReturnDocument
from app.core.plans import TRIAL_LIMITS

logger = logging.getLogger(__name__)

QUOTA_RULES = {
    "message": {
        "counter": "chats_today",
        "date_field": "last_chat_date",
        "daily_limit": TRIAL_LIMITS["messages_daily"],
        "total_counter": "trial_messages_sent",
        "total_limit": TRIAL_LIMITS["messages_total"],
        "daily_error": (
            "🚫 Daily Message Limit Reached\n\n"
            f"You've used all {TRIAL_LIMITS['messages_daily']} messages for today. This limit resets at midnight.\n\n"
            "💡 Upgrade to our paid plan for unlimited messages and advanced features!"
        ),
        "total_error": (
            "🎯 Trial Period Completed\n\n"
            f"You've used all {TRIAL_LIMITS['messages_total']} messages included in your free trial.\n\n"
            "🚀 Upgrade now to continue using BuzAI with:\n"
            "• Unlimited messages\n• Priority support\n• Advanced features\n• No restrictions"
        ),
    },
    "upload": {
        "counter": "uploads_today",
        "date_field": "last_upload_date",
        "daily_limit": TRIAL_LIMITS["uploads_daily"],
        "daily_error": (
            "📎 Daily File Upload Limit\n\n"
            f"You've already uploaded {TRIAL_LIMITS['uploads_daily']} file today. This limit resets at midnight.\n\n"
            "💡 Upgrade to upload multiple files daily and get unlimited AI analysis!"
        ),
    },
    "package": {
        "counter": "packages_today",
        "date_field": "last_package_date",
        "daily_limit": TRIAL_LIMITS["packages_daily"],
        "daily_error": (
            "📊 Daily Marketing Package Limit\n\n"
            f"You've already created {TRIAL_LIMITS['packages_daily']} marketing package today. This limit resets at midnight.\n\n"
            "🚀 Upgrade to create unlimited marketing packages and scale your business faster!"
        ),
    },
}


def today_str(now: Optional[datetime] = None) -> str:
    """UTC calendar day used for counter rollover, e.g. '2025-01-31'."""
    return (now or datetime.utcnow()).date().isoformat()


def _used_today(user: dict, rule: dict, today: str) -> int:
    if user.get(rule["date_field"], "") != today:
        return 0
    return user.get(rule["counter"], 0) or 0


def _raise_if_exhausted(user: dict, rule: dict, today: str):
    if _used_today(user, rule, today) >= rule["daily_limit"]:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=rule["daily_error"])
    total_counter = rule.get("total_counter")
    if total_counter and (user.get(total_counter, 0) or 0) >= rule["total_limit"]:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=rule["total_error"])


async def consume(db, user: dict, kind: str, now: Optional[datetime] = None) -> dict:
    """
    Charges one unit of `kind` ("message", "upload" or "package") to a trial user.

    Only users with status "trial" are metered; everyone else is returned untouched.
    The counter is reset when its stored day differs from today, then incremented
    with a conditional update so two concurrent requests cannot both take the
    last unit. Raises HTTPException(429) when a cap is reached.

    Returns the user document as stored after the update.
    """
    if user.get("status") != "trial":
        return user

    rule = QUOTA_RULES[kind]
    now = now or datetime.utcnow()
    today = today_str(now)
    user_id = user["_id"]
    counter, date_field = rule["counter"], rule["date_field"]

    # Cheap pre-check on the document we already hold
    _raise_if_exhausted(user, rule, today)

    if user.get(date_field, "") != today:
        await db["users"].update_one(
            {"_id": user_id, "status": "trial", date_field: {"$ne": today}},
            {"$set": {counter: 0, date_field: today}}
        )

    query = {"_id": user_id, "status": "trial", date_field: today, counter: {"$lt": rule["daily_limit"]}}
    increments = {counter: 1}
    total_counter = rule.get("total_counter")
    if total_counter:
        query[total_counter] = {"$lt": rule["total_limit"]}
        increments[total_counter] = 1

    updated = await db["users"].find_one_and_update(
        query,
        {"$inc": increments, "$set": {"updated_at": now}},
        return_document=ReturnDocument.AFTER
    )

    if updated is None:
        # Lost a race or the plan changed underneath us; decide from the stored state
        current = await db["users"].find_one({"_id": user_id}) or user
        if current.get("status") != "trial":
            return current
        _raise_if_exhausted(current, rule, today)
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=rule["daily_error"])

    usage = f"{updated[counter]}/{rule['daily_limit']} today"
    if total_counter:
        usage += f", {updated[total_counter]}/{rule['total_limit']} total"
    logger.info(f"Trial user {user_id} {kind} usage: {usage}")
    return updated


def usage_summary(user: dict, now: Optional[datetime] = None) -> dict:
    """Per-kind usage for the profile page. Non-trial users are unmetered."""
    if user.get("status") != "trial":
        return {kind: {"used": None, "limit": None, "remaining": None} for kind in QUOTA_RULES}

    today = today_str(now)
    summary = {}
    for kind, rule in QUOTA_RULES.items():
        used = _used_today(user, rule, today)
        remaining = max(rule["daily_limit"] - used, 0)
        entry = {"used": used, "limit": rule["daily_limit"], "remaining": remaining}
        if rule.get("total_counter"):
            total_used = user.get(rule["total_counter"], 0) or 0
            entry["total_used"] = total_used
            entry["total_limit"] = rule["total_limit"]
            entry["remaining"] = min(remaining, max(rule["total_limit"] - total_used, 0))
        summary[kind] = entry
    return summary
