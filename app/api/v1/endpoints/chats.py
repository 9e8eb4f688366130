from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from typing import Optional
from app.database.connection import get_mongo_db
from app.database.crud import (
    create_chat,
    delete_chat,
    get_chat_for_user,
    get_chats_by_user,
    get_messages_by_chat,
    serialize_doc,
)
from app.schemas.chat import ChatCreate, ChatOut, MessageOut
from app.services.auth_services import get_current_user

router = APIRouter()


def _success(status_code: int, message: str, data) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "success", "status_code": status_code, "message": message, "data": jsonable_encoder(data)}
    )


@router.post("/")
async def create(
    payload: Optional[ChatCreate] = None,
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db),
):
    """
    Create a new chat for the current user.
    """
    title = payload.title if payload else None
    chat = await create_chat(db, str(current_user["_id"]), title=title)
    return _success(status.HTTP_201_CREATED, "Chat created successfully", ChatOut(**serialize_doc(chat)))


@router.get("/")
async def list_chats(
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db),
):
    """
    Get all chats of the current user, newest first.
    """
    chats = await get_chats_by_user(db, str(current_user["_id"]))
    return _success(status.HTTP_200_OK, "Chats retrieved successfully", [ChatOut(**serialize_doc(c)) for c in chats])


@router.get("/{chat_id}/messages")
async def list_messages(
    chat_id: str,
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db),
):
    chat = await get_chat_for_user(db, chat_id, str(current_user["_id"]))
    if not chat:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")
    messages = await get_messages_by_chat(db, chat_id)
    return _success(status.HTTP_200_OK, "Messages retrieved successfully", [MessageOut(**serialize_doc(m)) for m in messages])


@router.delete("/{chat_id}")
async def remove(
    chat_id: str,
    current_user: dict = Depends(get_current_user),
    db = Depends(get_mongo_db),
):
    chat = await get_chat_for_user(db, chat_id, str(current_user["_id"]))
    if not chat:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")
    await delete_chat(db, chat_id)
    return _success(status.HTTP_200_OK, "Chat deleted successfully", {"id": chat_id})
