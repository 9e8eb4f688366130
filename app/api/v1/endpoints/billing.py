from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from app.database.connection import get_mongo_db
from app.schemas.billing import PaymentRequest
from app.services.access_service import resolve_access
from app.services.auth_services import get_current_user
from app.services import billing_service

router = APIRouter()


@router.get("/plans")
async def plans():
    return {"status": "success", "data": billing_service.list_plans()}


@router.post("/trial")
async def start_trial(
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db),
):
    fields = await billing_service.start_trial(db, current_user)
    return JSONResponse(status_code=status.HTTP_200_OK, content={
        "status": "success",
        "status_code": status.HTTP_200_OK,
        "message": "Your 3-day free trial has started!",
        "data": jsonable_encoder({"status": fields["status"], "trial_end": fields["trial_end"]}),
    })


@router.post("/payments", status_code=201)
async def submit_payment(
    payload: PaymentRequest,
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db),
):
    payment_id = await billing_service.submit_manual_payment(
        db, current_user, payload.plan, payload.email, payload.reference
    )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content={
        "status": "success",
        "status_code": status.HTTP_201_CREATED,
        "message": "Payment request submitted! We'll contact you shortly.",
        "data": {"payment_id": payment_id, "status": "pending"},
    })


@router.get("/status")
async def billing_status(current_user: dict = Depends(get_current_user)):
    """Polled by the client while a payment is under review."""
    state = resolve_access(current_user)
    return {
        "status": current_user.get("status"),
        "access": state["access"],
        "redirect": state["redirect"],
    }
