"""
FastAPI Application Entry Point - Order Board
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from order_board.config import settings
from order_board.database import init_db
from order_board.logging_config import setup_logging, get_logger
from order_board.api import orders, products, health

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Order Board",
    description="Restaurant order lifecycle shared by cashier, kitchen and waiter screens",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(orders.router)
app.include_router(products.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.on_event("startup")
def startup_event():
    """Initialize logging and database on startup"""
    setup_logging()
    logger.info("Starting %s...", settings.SERVICE_NAME)
    init_db()
    logger.info("Database initialized")
    logger.info("Product catalog: %s", settings.PRODUCT_SERVICE_URL or "local table")
    logger.info("Order events: %s", "enabled" if settings.EVENTS_ENABLED else "disabled")
    logger.info("%s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down %s...", settings.SERVICE_NAME)
