# app/schemas/chat.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

# --- Chat Schemas ---
class ChatCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)

class ChatOut(BaseModel):
    id: str
    user_id: str
    title: str
    created_at: datetime
    file_name: Optional[str] = None
    file_uploaded_at: Optional[datetime] = None

# --- Message Schemas ---
class MessageOut(BaseModel):
    id: str
    chat_id: str
    role: str
    text: str
    created_at: datetime

# --- Generation Schemas ---
# Fields are optional so that a missing value gets the same 400 as an empty one
class GenerateRequest(BaseModel):
    prompt: Optional[str] = None
    chat_id: Optional[str] = None

class GenerateResponse(BaseModel):
    ok: bool = True
    result: str

class MarketingPackageRequest(BaseModel):
    prompt: Optional[str] = None
    chat_id: Optional[str] = None

class MarketingPackageResponse(BaseModel):
    success: bool = True
    marketing_package: str
    enhanced: bool = True
    package_type: str = "ultimate"
    chat_id: str

class UploadResponse(BaseModel):
    success: bool = True
    message: str
    file_name: str
    content_length: int
