# app/api/v1/endpoints/chat_ai.py

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from typing import Optional
import logging
from app.core.config import settings
from app.database.connection import get_mongo_db
from app.database.crud import get_chat_for_user, set_chat_file
from app.schemas.chat import GenerateRequest, GenerateResponse, UploadResponse
from app.services.access_service import require_active_user
from app.services.chat_service import generate_reply
from app.services.file_processing import extract_upload_text
from app.services import quota_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    payload: GenerateRequest,
    current_user: dict = Depends(require_active_user),
    db = Depends(get_mongo_db),
):
    """
    Sends a prompt, together with the chat's history and uploaded file, to the
    model and stores both sides of the exchange.
    """
    prompt = (payload.prompt or "").strip()
    if not prompt or not payload.chat_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing prompt or chatId")

    user_id = str(current_user["_id"])
    chat = await get_chat_for_user(db, payload.chat_id, user_id)
    if not chat:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")

    await quota_service.consume(db, current_user, "message")
    logger.info(f"Prompt received from user {user_id} for chat {payload.chat_id}")

    try:
        result = await generate_reply(db, chat, prompt)
    except Exception as e:
        logger.error(f"Generation failed for chat {payload.chat_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error. Please try again."
        )
    return GenerateResponse(ok=True, result=result)


@router.post("/upload", response_model=UploadResponse)
async def upload(
    file: Optional[UploadFile] = File(None),
    chat_id: Optional[str] = Form(None),
    current_user: dict = Depends(require_active_user),
    db = Depends(get_mongo_db),
):
    """
    Attaches a text or PDF file to a chat. Later prompts in the chat get the
    file's text as context.
    """
    if file is None or not chat_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing file or chat ID")

    chat = await get_chat_for_user(db, chat_id, str(current_user["_id"]))
    if not chat:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")

    content = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File is larger than {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB."
        )

    file_name = file.filename or "upload.txt"
    try:
        file_content = extract_upload_text(file_name, file.content_type, content)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    await quota_service.consume(db, current_user, "upload")
    await set_chat_file(db, chat_id, file_name, file_content)
    logger.info(f"File uploaded: {file_name} ({len(file_content)} chars) to chat {chat_id}")

    return UploadResponse(
        success=True,
        message="File uploaded successfully",
        file_name=file_name,
        content_length=len(file_content),
    )
