"""
Product catalog API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from order_board.database import get_db
from order_board.repositories.product_repository import ProductRepository
from order_board.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)

router = APIRouter(prefix="/products", tags=["products"])


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Dependency to get ProductRepository instance"""
    return ProductRepository(db)


@router.get("", response_model=ProductListResponse, summary="Get all products")
def get_products(
    skip: int = Query(0, ge=0, description="Number of products to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of products to return"),
    available_only: bool = Query(False, description="Only products the cashier may order"),
    repository: ProductRepository = Depends(get_product_repository)
):
    """Retrieve products with pagination"""
    products = repository.get_all(skip=skip, limit=limit, available_only=available_only)
    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in products],
        total=repository.count()
    )


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository)
):
    """Retrieve a specific product by ID"""
    product = repository.get_by_id(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )
    return product


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    product_data: ProductCreate,
    repository: ProductRepository = Depends(get_product_repository)
):
    """
    Create a new product

    - **name**: Product name (required)
    - **price**: Product price (required, non-negative)
    - **category**: Product category (optional)
    - **is_available**: Whether it can be ordered (default true)
    """
    return repository.create(product_data)


@router.put("/{product_id}", response_model=ProductResponse, summary="Update product")
def update_product(
    product_id: str,
    product_data: ProductUpdate,
    repository: ProductRepository = Depends(get_product_repository)
):
    """
    Update an existing product

    Orders already placed keep the name and price they were created with.
    """
    product = repository.update(product_id, product_data)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id={product_id} not found"
        )
    return product
