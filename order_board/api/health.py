"""
Health check endpoint
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone
import httpx

from order_board.database import get_db
from order_board.config import settings
from order_board.repositories.order_repository import OrderRepository
from order_board.schemas.order import OrderStatus
from order_board.services.lifecycle import is_terminal

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint

    Checks:
    - Database connectivity (and open orders per status)
    - Product Service connectivity, when a remote catalog is configured
    """
    open_orders = {}
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
        repository = OrderRepository(db)
        open_orders = {
            s.value: repository.count_by_status(s)
            for s in OrderStatus if not is_terminal(s)
        }
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    if settings.PRODUCT_SERVICE_URL:
        try:
            async with httpx.AsyncClient(timeout=2.0) as client:
                response = await client.get(f"{settings.PRODUCT_SERVICE_URL}/health")
                if response.status_code == 200:
                    catalog_status = "healthy"
                else:
                    catalog_status = f"unhealthy: status {response.status_code}"
        except Exception as e:
            catalog_status = f"unhealthy: {str(e)}"
    else:
        catalog_status = "local"

    overall_status = "healthy" if (db_status == "healthy" and catalog_status in ("healthy", "local")) else "unhealthy"

    return {
        "service": settings.SERVICE_NAME,
        "status": overall_status,
        "database": db_status,
        "product_catalog": catalog_status,
        "open_orders": open_orders,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/")
def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": "1.0.0",
        "docs": "/docs"
    }
