from datetime import datetime
from pydantic import BaseModel, Field

class Product(BaseModel):
    id: str
    name: str
    price: float
    original_price: float = Field(..., alias="originalPrice")
    description: str = ""
    stock: int = 0
    image: str = ""
    discount: int = 0

    class Config:
        populate_by_name = True

class CartItem(Product):
    quantity: int = Field(1, ge=1)

class OrderConfirmation(BaseModel):
    order_id: str = Field(..., alias="orderId")
    total_amount: float = Field(..., alias="totalAmount")
    item_count: int = Field(..., alias="itemCount")
    status: str
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True
