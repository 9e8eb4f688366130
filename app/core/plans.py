# app/core/plans.py
from datetime import datetime, timedelta
from typing import Optional

DAYS_PER_MONTH = 30
TRIAL_DAYS = 3

PLANS = {
    "trial": {
        "title": "3-Day Free Trial",
        "type": "trial",
        "amount": 0,
        "duration": "for 3 days",
        "months": None,
        "features": ["Access to AI chats", "Basic strategies", "Social media content"],
    },
    "weekly": {
        "title": "Weekly Plan",
        "type": "paid",
        "amount": 5,
        "duration": "per week",
        "months": 0.25,
        "features": ["Unlimited AI chats", "Full strategies", "Advanced content tools"],
    },
    "monthly": {
        "title": "1 Month",
        "type": "paid",
        "amount": 15,
        "duration": "per month",
        "months": 1,
        "features": ["Unlimited AI chats", "Full strategies", "Advanced content tools"],
    },
    "quarterly": {
        "title": "3 Months",
        "type": "paid",
        "amount": 40,
        "duration": "every 3 months",
        "months": 3,
        "features": ["Unlimited AI chats", "Full strategies", "Advanced content tools"],
    },
    "semiannual": {
        "title": "6 Months",
        "type": "paid",
        "amount": 70,
        "duration": "every 6 months",
        "months": 6,
        "features": ["Unlimited AI chats", "Full strategies", "Advanced content tools"],
    },
    "yearly": {
        "title": "1 Year",
        "type": "paid",
        "amount": 120,
        "duration": "per year",
        "months": 12,
        "features": ["Unlimited AI chats", "Full strategies", "Advanced content tools"],
    },
}

# Trial caps. Paid (approved) users are not metered.
TRIAL_LIMITS = {
    "messages_daily": 10,
    "messages_total": 30,
    "uploads_daily": 1,
    "packages_daily": 1,
}


def is_paid_plan(plan_code: str) -> bool:
    plan = PLANS.get(plan_code)
    return plan is not None and plan["type"] == "paid"


def plan_end_date(plan_code: str, start: datetime) -> Optional[datetime]:
    """End of the subscription window for a plan started at `start`."""
    if plan_code == "trial":
        return start + timedelta(days=TRIAL_DAYS)
    plan = PLANS.get(plan_code)
    if not plan or plan["months"] is None:
        return None
    return start + timedelta(days=plan["months"] * DAYS_PER_MONTH)


# Helper used when a user document is created or a trial starts
def get_initial_usage_counters() -> dict:
    return {
        "trial_messages_sent": 0,
        "chats_today": 0,
        "last_chat_date": "",
        "uploads_today": 0,
        "last_upload_date": "",
        "packages_today": 0,
        "last_package_date": "",
    }
