from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


UserStatus = Literal["inactive", "trial", "pending", "approved", "denied", "expired"]
MessageRole = Literal["user", "assistant"]
PaymentStatus = Literal["pending", "approved", "denied"]


class UserModel(BaseModel):
    email: str = Field(..., description="User email")
    password: str = Field(..., description="Password hash")
    status: UserStatus = Field("inactive", description="Subscription status")
    plan: Optional[str] = Field(None, description="Active plan code")
    requested_plan: Optional[str] = Field(None, description="Plan awaiting payment approval")
    paid: bool = Field(False, description="Has an approved paid plan")
    trial_used: bool = Field(False, description="Free trial already consumed")
    trial_start: Optional[datetime] = None
    trial_end: Optional[datetime] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    payment_reference: Optional[str] = None

    # Trial usage counters; the *_date fields hold the UTC day (YYYY-MM-DD) of the last action
    trial_messages_sent: int = 0
    chats_today: int = 0
    last_chat_date: str = ""
    uploads_today: int = 0
    last_upload_date: str = ""
    packages_today: int = 0
    last_package_date: str = ""

    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation time")
    updated_at: datetime = Field(default_factory=datetime.utcnow, description="Update time")


class ChatModel(BaseModel):
    user_id: str = Field(..., description="Owner user id")
    title: str = Field("Untitled Chat", description="Chat title")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    file_content: Optional[str] = None
    file_name: Optional[str] = None
    file_uploaded_at: Optional[datetime] = None


class MessageModel(BaseModel):
    chat_id: str = Field(..., description="Parent chat id")
    role: MessageRole
    text: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class PaymentModel(BaseModel):
    user_id: str
    email: str
    plan: str
    amount: float
    method: str = "manual"
    status: PaymentStatus = "pending"
    reference: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    reviewed_at: Optional[datetime] = None
