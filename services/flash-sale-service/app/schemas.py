from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from decimal import Decimal
from datetime import datetime
from shared.security_config import sanitize_input

class LineItem(BaseModel):
    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)

    @field_validator('id')
    def id_to_str(cls, v):
        return None if v is None else str(v)

    @field_validator('name')
    def strip_name(cls, v):
        # Stored as submitted; escaping happens wherever the name is rendered
        return v.strip() if isinstance(v, str) else v

class OrderCreate(BaseModel):
    cart: List[LineItem] = Field(..., min_length=1)
    customer_email: Optional[str] = Field(None, alias="customerEmail")

    @field_validator('customer_email')
    def sanitize_email(cls, v):
        v = sanitize_input(v)
        return v or None # blank falls back to the default address

    class Config:
        populate_by_name = True

class OrderSummary(BaseModel):
    order_id: str = Field(..., alias="orderId")
    total_amount: float = Field(..., alias="totalAmount")
    item_count: int = Field(..., alias="itemCount")
    status: str
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True
