from fastapi import APIRouter
from .endpoints.auth import router as auth
from .endpoints.users import router as users
from .endpoints.chats import router as chats
from .endpoints.chat_ai import router as chat
from .endpoints.marketing import router as marketing
from .endpoints.billing import router as billing
from .endpoints.admin import router as admin

api_router = APIRouter()
api_router.include_router(auth, prefix="/auth", tags=["auth"])
api_router.include_router(users, prefix="/users", tags=["users"])
api_router.include_router(chats, prefix="/chats", tags=["chats"])
api_router.include_router(chat, prefix="/chat", tags=["chat"])
api_router.include_router(marketing, prefix="/marketing", tags=["marketing"])
api_router.include_router(billing, prefix="/billing", tags=["billing"])
api_router.include_router(admin, prefix="/admin", tags=["admin"])
