"""
FastAPI Application Entry Point - Storefront Service
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from storefront.config import settings
from storefront.database import init_db
from storefront.errors import StorefrontError
from storefront.logger import setup_logging
from storefront.middleware import AdminGateMiddleware
from storefront.services.admin_auth import AdminVerifier
from storefront.services.notification_service import NotificationService
from storefront.services.payment_gateway import RazorpayClient
from storefront.services.shipping_client import ShiprocketClient
from storefront.api import admin, cart, health, orders, payments, shipping

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Storefront Service",
    description="Checkout, payment verification, order notifications and shipping handoff",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Process-scoped upstream clients
app.state.payment_gateway = RazorpayClient(settings)
app.state.shipping_client = ShiprocketClient(settings)
app.state.notifier = NotificationService(settings)
app.state.admin_verifier = AdminVerifier.from_settings(settings)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Tier-1 admin gate (cookie presence only)
app.add_middleware(AdminGateMiddleware, login_path=settings.LOGIN_PATH)

# Include routers
app.include_router(health.router)
app.include_router(payments.router)
app.include_router(orders.router)
app.include_router(orders.admin_router)
app.include_router(shipping.router)
app.include_router(admin.router)
app.include_router(cart.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error(f"{exc.status_code} {exc.message} | URL: {request.url} | Method: {request.method}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error: {exc} | URL: {request.url} | Method: {request.method}")
    return JSONResponse(status_code=500, content={"error": "Internal Error"})


@app.on_event("startup")
def startup_event():
    """Initialize logging and database on startup"""
    setup_logging(settings.LOG_LEVEL)
    logger.info(f"Starting {settings.SERVICE_NAME}...")
    init_db()
    logger.info("Database initialized")
    logger.info(f"Email service: {settings.EMAIL_SERVICE}")
    logger.info(f"{settings.SERVICE_NAME} is running on port {settings.SERVICE_PORT}")


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.SERVICE_NAME}...")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=settings.SERVICE_PORT)
