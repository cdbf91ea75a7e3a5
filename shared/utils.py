from datetime import datetime, timezone
from typing import Optional, Generic, TypeVar, Any, List
from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

# --- Configuration ---
class Settings(BaseSettings):
    MONGO_URL: str = "mongodb://mongodb:27017"
    MONGO_DB: str = "flash_sale_db"
    ORDERS_COLLECTION: str = "orders"
    ORDER_TTL_DAYS: int = 30
    DEFAULT_CUSTOMER_EMAIL: str = "anonymous@example.com"

    # Artificial latency to simulate flash sale traffic
    SIMULATE_LATENCY: bool = True
    PRODUCTS_LATENCY_MIN_MS: int = 200
    PRODUCTS_LATENCY_MAX_MS: int = 800
    ORDERS_LATENCY_MIN_MS: int = 500
    ORDERS_LATENCY_MAX_MS: int = 4000

    RATE_LIMIT: str = "60/minute"
    RATE_LIMIT_ENABLED: bool = True
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    SERVICE_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    class Config:
        env_file = ".env"

settings = Settings()

# --- Database ---
def get_db_client(url: str = settings.MONGO_URL) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(url, tz_aware=True)

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# --- Response Models ---
T = TypeVar("T")

class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    timestamp: datetime = Field(default_factory=utcnow)

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
    details: Optional[Any] = None
    timestamp: datetime = Field(default_factory=utcnow)

class HealthResponse(BaseModel):
    service: str
    status: str
    timestamp: datetime
    version: str
    database: Optional[str] = None


# --- Exceptions ---
class AppException(HTTPException):
    def __init__(
        self,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        detail: str = "An error occurred",
        headers: Optional[dict] = None,
        error: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error = error

class InvalidCartException(AppException):
    def __init__(self, detail: str = "Invalid cart data"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class ServerException(AppException):
    def __init__(self, detail: str = "Internal server error", error: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error=error
        )
