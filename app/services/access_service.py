import logging
from datetime import datetime
from typing import Optional
from fastapi import Depends, HTTPException, status
from app.database.connection import get_mongo_db
from app.database.crud import update_user
from app.services.auth_services import get_current_user

logger = logging.getLogger(__name__)

ACCESS_MESSAGES = {
    "pending": "Your payment is under review. Access will be activated once it is approved.",
    "trial_expired": "Your trial has ended. Please upgrade.",
    "plan_expired": "Your plan has expired. Please renew your subscription.",
    "denied": "Your payment request was declined. Please choose a plan again.",
    "no_plan": "No active plan. Start a free trial or choose a plan.",
}


def resolve_access(user: dict, now: Optional[datetime] = None) -> dict:
    """
    Classifies a user document into an access state.

    Returns a dict with `access` (active, pending, expired, denied, no_plan),
    `redirect` (dashboard, pending, billing) and a human readable `message`.
    """
    now = now or datetime.utcnow()
    user_status = user.get("status")

    if user_status == "pending":
        return {"access": "pending", "redirect": "pending", "message": ACCESS_MESSAGES["pending"]}

    if user_status == "trial":
        trial_end = user.get("trial_end")
        if not trial_end or trial_end <= now:
            return {"access": "expired", "redirect": "billing", "message": ACCESS_MESSAGES["trial_expired"]}
        return {"access": "active", "redirect": "dashboard", "message": None}

    if user_status == "approved":
        end_date = user.get("end_date")
        if not end_date or end_date <= now:
            return {"access": "expired", "redirect": "billing", "message": ACCESS_MESSAGES["plan_expired"]}
        return {"access": "active", "redirect": "dashboard", "message": None}

    if user_status == "expired":
        return {"access": "expired", "redirect": "billing", "message": ACCESS_MESSAGES["plan_expired"]}

    if user_status == "denied":
        return {"access": "denied", "redirect": "billing", "message": ACCESS_MESSAGES["denied"]}

    return {"access": "no_plan", "redirect": "billing", "message": ACCESS_MESSAGES["no_plan"]}


async def require_active_user(
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db)
) -> dict:
    """Dependency for endpoints that need a running trial or paid plan."""
    state = resolve_access(current_user)
    if state["access"] == "active":
        return current_user

    if state["access"] == "expired" and current_user.get("status") in ("trial", "approved"):
        await update_user(db, current_user["_id"], {"status": "expired"})
        logger.info(f"User {current_user['_id']} moved to expired (was {current_user.get('status')})")

    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=state["message"])
