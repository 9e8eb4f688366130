from pydantic import BaseModel, Field
from typing import Optional

class PaymentRequest(BaseModel):
    plan: str = Field(..., description="Plan code, e.g. monthly")
    email: str = Field(..., description="Contact email for the manual payment")
    reference: Optional[str] = Field(None, description="Bank/transfer reference")
