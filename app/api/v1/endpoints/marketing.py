from fastapi import APIRouter, Depends, HTTPException, status
import logging
from app.database.connection import get_mongo_db
from app.database.crud import get_chat_for_user
from app.schemas.chat import MarketingPackageRequest, MarketingPackageResponse
from app.services.access_service import require_active_user
from app.services.marketing_service import create_package_in_chat
from app.services import quota_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/package", response_model=MarketingPackageResponse)
async def marketing_package(
    payload: MarketingPackageRequest,
    current_user: dict = Depends(require_active_user),
    db = Depends(get_mongo_db),
):
    """
    Builds a marketing package for a business idea and stores it in a chat.
    """
    prompt = (payload.prompt or "").strip()
    if not prompt:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please provide a business idea or topic")

    user_id = str(current_user["_id"])
    chat = None
    if payload.chat_id:
        chat = await get_chat_for_user(db, payload.chat_id, user_id)
        if not chat:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chat not found")

    await quota_service.consume(db, current_user, "package")
    logger.info(f"Generating marketing package for user {user_id}")

    try:
        package, chat_id = await create_package_in_chat(db, user_id, prompt, chat)
    except Exception as e:
        logger.error(f"Marketing package generation error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate marketing package. Please try again."
        )
    return MarketingPackageResponse(marketing_package=package, chat_id=chat_id)
