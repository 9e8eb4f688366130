# app/services/billing_service.py

import logging
from datetime import datetime
from typing import Optional
from fastapi import HTTPException, status
from app.core.plans import PLANS, is_paid_plan, plan_end_date, get_initial_usage_counters
from app.database.crud import (
    create_payment,
    get_latest_pending_payment,
    get_user_by_id,
    update_payment_status,
    update_user,
)
from app.database.models import PaymentModel

logger = logging.getLogger(__name__)


def list_plans() -> list:
    return [{"code": code, **plan} for code, plan in PLANS.items()]


async def start_trial(db, user: dict) -> dict:
    """Starts the one-off free trial. Raises 400 when it was used before."""
    if user.get("trial_used"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You have already used your free trial.")
    if user.get("status") == "approved" or user.get("paid"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You already have a paid plan.")

    start = datetime.utcnow()
    end = plan_end_date("trial", start)
    fields = {
        "status": "trial",
        "plan": "trial",
        "paid": False,
        "trial_used": True,
        "start_date": start,
        "end_date": end,
        "trial_start": start,
        "trial_end": end,
        **get_initial_usage_counters(),
    }
    await update_user(db, user["_id"], fields)
    logger.info(f"Trial started for user {user['_id']} until {end.isoformat()}")
    return fields


async def submit_manual_payment(db, user: dict, plan_code: str, email: str, reference: Optional[str] = None) -> str:
    """Records a manual payment request and parks the user in `pending` until an admin reviews it."""
    if not is_paid_plan(plan_code):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown paid plan: {plan_code}")
    if not email or not email.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please fill all required fields.")

    start = datetime.utcnow()
    end = plan_end_date(plan_code, start)
    payment = PaymentModel(
        user_id=str(user["_id"]),
        email=email.strip(),
        plan=plan_code,
        amount=PLANS[plan_code]["amount"],
        reference=reference,
        start_date=start,
        end_date=end,
    )
    payment_id = await create_payment(db, payment)

    await update_user(db, user["_id"], {
        "status": "pending",
        "requested_plan": plan_code,
        "payment_reference": reference or payment_id,
        "start_date": start,
        "end_date": end,
    })
    logger.info(f"Payment {payment_id} submitted by user {user['_id']} for plan {plan_code}")
    return payment_id


async def _get_pending_user(db, user_id: str) -> dict:
    user = await get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.get("status") != "pending":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User has no pending payment")
    return user


async def approve_user(db, user_id: str, admin_email: str) -> dict:
    """Activates the requested plan; the plan window starts at approval time."""
    user = await _get_pending_user(db, user_id)
    plan_code = user.get("requested_plan")
    start = datetime.utcnow()
    fields = {
        "status": "approved",
        "plan": plan_code,
        "paid": True,
        "start_date": start,
        "end_date": plan_end_date(plan_code, start),
    }
    await update_user(db, user["_id"], fields)

    payment = await get_latest_pending_payment(db, str(user["_id"]))
    if payment:
        await update_payment_status(db, payment["_id"], "approved")
    logger.info(f"Admin {admin_email} approved user {user_id} for plan {plan_code}")
    return fields


async def deny_user(db, user_id: str, admin_email: str) -> dict:
    user = await _get_pending_user(db, user_id)
    fields = {"status": "denied"}
    await update_user(db, user["_id"], fields)

    payment = await get_latest_pending_payment(db, str(user["_id"]))
    if payment:
        await update_payment_status(db, payment["_id"], "denied")
    logger.info(f"Admin {admin_email} denied user {user_id}")
    return fields
