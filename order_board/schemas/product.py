"""
Pydantic schemas for the product catalog
"""
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class ProductBase(BaseModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Product price")
    category: Optional[str] = Field(None, max_length=100, description="Product category")
    is_available: bool = Field(True, description="Whether the cashier may order it")


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    is_available: Optional[bool] = None


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: str

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    """Schema for list of products response"""
    products: list[ProductResponse]
    total: int


class ProductSnapshot(BaseModel):
    """What order creation copies from a product"""
    id: str
    name: str
    price: Decimal
    is_available: bool = True

    model_config = ConfigDict(from_attributes=True)
