from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

class ProductDB(BaseModel):
    id: str
    name: str
    price: float
    original_price: float = Field(..., alias="originalPrice")
    description: str
    stock: int
    image: str
    discount: int # percent off original_price

    class Config:
        populate_by_name = True
        frozen = True

class OrderItemDB(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    price: float
    quantity: int

class OrderDB(BaseModel):
    order_id: str = Field(..., alias="orderId")
    created_at: int = Field(..., alias="createdAt") # epoch milliseconds
    customer_email: str = Field(..., alias="customerEmail")
    items: List[OrderItemDB]
    total_amount: float = Field(..., alias="totalAmount")
    status: str = "CONFIRMED"
    expiration_time: datetime = Field(..., alias="expirationTime")
    timestamp: datetime

    class Config:
        populate_by_name = True
