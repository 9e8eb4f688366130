from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class UserOut(BaseModel):
    id: str = Field(..., description="User id")
    email: str = Field(..., description="User email")
    status: str = Field("inactive", description="Subscription status")
    plan: Optional[str] = None
    requested_plan: Optional[str] = None
    paid: bool = False
    trial_used: bool = False
    trial_end: Optional[datetime] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "UserOut":
        data = {key: value for key, value in doc.items() if key not in ("_id", "password")}
        data["id"] = str(doc["_id"])
        # Approved users created before plan was written on approval only carry requested_plan
        if data.get("status") == "approved" and not data.get("plan"):
            data["plan"] = data.get("requested_plan")
        return cls.model_validate(data)


class PendingUserOut(BaseModel):
    id: str
    email: str
    requested_plan: Optional[str] = None
    payment_reference: Optional[str] = None
    updated_at: Optional[datetime] = None
