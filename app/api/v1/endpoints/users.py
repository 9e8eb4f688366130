from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from app.services.auth_services import get_current_user
from app.services.access_service import resolve_access
from app.services.quota_service import usage_summary
from app.database.connection import get_mongo_db
from app.database.crud import count_chats_by_user
from app.schemas.users import UserOut

router = APIRouter()

@router.get("/me")
async def read_users_me(
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db)
):
    chat_count = await count_chats_by_user(db, str(current_user["_id"]))
    data = {
        "user": UserOut.from_doc(current_user),
        "access": resolve_access(current_user),
        "chat_count": chat_count,
        "usage": usage_summary(current_user),
    }
    return JSONResponse(content={
        "status": "success",
        "status_code": status.HTTP_200_OK,
        "message": "User data",
        "data": jsonable_encoder(data)
        },
        status_code=status.HTTP_200_OK)
