from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.modules.express.services.transitions import ORDER_STATUSES

class RecipientInfo(BaseModel):
    name: str
    phone: str
    building: str
    room: str

class OrderDetails(BaseModel):
    express_company: str
    tracking_number: str
    pickup_location: str
    delivery_location: str
    recipient_info: RecipientInfo

class Payment(BaseModel):
    amount: float = Field(..., ge=0)
    method: Literal["wechat", "alipay", "cash"] = "wechat"
    status: Literal["pending", "paid", "refunded"] = "pending"

class ExpressOrderCreate(BaseModel):
    type: Literal["pickup", "delivery"]
    details: OrderDetails
    payment: Payment
    notes: str = Field("", max_length=500)
    duration_hours: Optional[int] = Field(None, ge=1)

class OrderTransition(BaseModel):
    status: str
    note: str = Field("", max_length=500)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v not in ORDER_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(ORDER_STATUSES)}")
        return v

class OrderAccept(BaseModel):
    note: str = Field("", max_length=500)

class OrderRate(BaseModel):
    score: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=500)

class TimelineEntry(BaseModel):
    action: str
    timestamp: datetime
    operator_id: Optional[str] = None
    note: str = ""

class Rating(BaseModel):
    score: int
    comment: Optional[str] = None
    rated_by: str
    rated_at: datetime

class ExpressOrder(BaseModel):
    """Order model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    customer_id: str
    helper_id: Optional[str] = None
    type: str
    details: OrderDetails
    payment: Payment
    notes: Optional[str] = ""
    status: str
    timeline: List[TimelineEntry] = []
    rating: Optional[Rating] = None
    expires_at: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
