from fastapi import FastAPI, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import List
import asyncio
import os
import random
import sys
import uvicorn

# Add the parent directory to sys.path to resolve shared imports
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../")))

from shared.utils import (
    get_db_client, settings, SuccessResponse, ErrorResponse,
    HealthResponse, AppException, InvalidCartException, ServerException
)
from shared.logging_config import setup_logging, RequestLoggingMiddleware
from shared.security_config import (
    setup_rate_limiting, SecurityHeadersMiddleware, limiter,
    cors_headers, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
)

from app import catalog
from app.models import ProductDB
from app.orders import build_order
from app.repository import OrderRepository
from app.schemas import OrderCreate, OrderSummary

SERVICE_NAME = "flash-sale-service"

# Setup Logging
logger = setup_logging(SERVICE_NAME, settings.LOG_LEVEL)

app = FastAPI(title="Flash Sale Service")

# Security Setup
setup_rate_limiting(app)
app.add_middleware(SecurityHeadersMiddleware)

# Middleware
app.add_middleware(RequestLoggingMiddleware, service_name=SERVICE_NAME)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)

@app.on_event("startup")
async def startup_db_client():
    app.mongodb_client = get_db_client()
    app.mongodb = app.mongodb_client[settings.MONGO_DB]
    await OrderRepository(app.mongodb[settings.ORDERS_COLLECTION]).ensure_indexes()

@app.on_event("shutdown")
async def shutdown_db_client():
    app.mongodb_client.close()

# --- Error Handlers ---
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    body = ErrorResponse(message=exc.detail, error=exc.error)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    body = ErrorResponse(message=InvalidCartException().detail, details=details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json", exclude_none=True),
    )

# --- Dependencies ---
def get_order_repository(request: Request) -> OrderRepository:
    return OrderRepository(request.app.mongodb[settings.ORDERS_COLLECTION])

# --- Helper ---
async def simulate_traffic_latency(min_ms: int, max_ms: int):
    """Sleep for a random delay to mimic a service under flash sale load."""
    if not settings.SIMULATE_LATENCY:
        return
    delay_ms = random.randint(min_ms, max_ms)
    logger.debug("Simulating traffic latency", extra={"delay_ms": delay_ms})
    await asyncio.sleep(delay_ms / 1000)

# --- Endpoints ---

@app.get("/products", response_model=SuccessResponse[List[ProductDB]])
@limiter.limit(settings.RATE_LIMIT)
async def list_products(request: Request):
    try:
        await simulate_traffic_latency(settings.PRODUCTS_LATENCY_MIN_MS, settings.PRODUCTS_LATENCY_MAX_MS)
        products = catalog.list_products()
    except Exception as e:
        logger.exception("Error fetching products")
        raise ServerException("Failed to fetch products", error=str(e))

    return SuccessResponse(data=products, message="Products retrieved successfully")

@app.post("/orders", response_model=SuccessResponse[OrderSummary], status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT)
async def create_order(
    order_in: OrderCreate,
    request: Request,
    repository: OrderRepository = Depends(get_order_repository)
):
    # Simulate high traffic latency - stronger on order creation
    await simulate_traffic_latency(settings.ORDERS_LATENCY_MIN_MS, settings.ORDERS_LATENCY_MAX_MS)

    order = build_order(order_in.cart, order_in.customer_email)
    try:
        await repository.put(order)
    except Exception as e:
        logger.exception("Error creating order", extra={"order_id": order.order_id})
        raise ServerException("Failed to create order", error=str(e))

    logger.info("Order created successfully", extra={
        "order_id": order.order_id,
        "total_amount": order.total_amount,
        "item_count": len(order.items),
        "customer_email": order.customer_email,
        "request_id": getattr(request.state, "request_id", None),
    })

    return SuccessResponse(
        data=OrderSummary(
            order_id=order.order_id,
            total_amount=order.total_amount,
            item_count=len(order.items),
            status=order.status,
            created_at=datetime.fromtimestamp(order.created_at / 1000, tz=timezone.utc),
        ),
        message="Order created successfully"
    )

# Preflights carrying Origin and Access-Control-Request-Method are answered by
# CORSMiddleware with a plain "OK" body; this route covers bare OPTIONS requests.
@app.options("/{full_path:path}")
async def preflight(full_path: str):
    return Response(status_code=status.HTTP_200_OK, headers=cors_headers())

@app.get("/health", response_model=HealthResponse)
async def health_check(repository: OrderRepository = Depends(get_order_repository)):
    try:
        await repository.ping()
        db_status = "connected"
    except Exception:
        db_status = "disconnected"

    if db_status != "connected":
        logger.error(f"Health Check Failed: DB={db_status}")
        raise AppException(status.HTTP_503_SERVICE_UNAVAILABLE, f"Service Unhealthy: DB={db_status}")

    return HealthResponse(
        service=SERVICE_NAME,
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.SERVICE_VERSION,
        database=db_status,
    )

def run():
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
