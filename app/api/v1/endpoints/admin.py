from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from app.database.connection import get_mongo_db
from app.database.crud import get_users_by_status
from app.schemas.users import PendingUserOut
from app.services.auth_services import get_current_admin
from app.services import billing_service

router = APIRouter()


@router.get("/pending-users")
async def pending_users(
    admin: dict = Depends(get_current_admin),
    db = Depends(get_mongo_db),
):
    users = await get_users_by_status(db, "pending")
    data = [
        PendingUserOut(
            id=str(u["_id"]),
            email=u["email"],
            requested_plan=u.get("requested_plan"),
            payment_reference=u.get("payment_reference"),
            updated_at=u.get("updated_at"),
        )
        for u in users
    ]
    return JSONResponse(status_code=status.HTTP_200_OK, content={
        "status": "success",
        "status_code": status.HTTP_200_OK,
        "message": "Pending users retrieved successfully",
        "data": jsonable_encoder(data),
    })


@router.post("/users/{user_id}/approve")
async def approve(
    user_id: str,
    admin: dict = Depends(get_current_admin),
    db = Depends(get_mongo_db),
):
    fields = await billing_service.approve_user(db, user_id, admin["email"])
    return JSONResponse(status_code=status.HTTP_200_OK, content={
        "status": "success",
        "status_code": status.HTTP_200_OK,
        "message": "User approved",
        "data": jsonable_encoder({"id": user_id, **fields}),
    })


@router.post("/users/{user_id}/deny")
async def deny(
    user_id: str,
    admin: dict = Depends(get_current_admin),
    db = Depends(get_mongo_db),
):
    fields = await billing_service.deny_user(db, user_id, admin["email"])
    return JSONResponse(status_code=status.HTTP_200_OK, content={
        "status": "success",
        "status_code": status.HTTP_200_OK,
        "message": "User denied",
        "data": {"id": user_id, **fields},
    })
