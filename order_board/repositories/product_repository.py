"""
Product Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from order_board.models.product import Product
from order_board.schemas.product import ProductCreate, ProductUpdate


class ProductRepository:
    """Repository for Product CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, skip: int = 0, limit: int = 100, available_only: bool = False) -> List[Product]:
        """Get products with pagination"""
        query = self.db.query(Product)
        if available_only:
            query = query.filter(Product.is_available.is_(True))
        return query.order_by(Product.category, Product.name).offset(skip).limit(limit).all()

    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID"""
        return self.db.query(Product).filter(Product.id == product_id).first()

    def create(self, product_data: ProductCreate) -> Product:
        """Create new product"""
        product = Product(**product_data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update(self, product_id: str, product_data: ProductUpdate) -> Optional[Product]:
        """Update existing product"""
        product = self.get_by_id(product_id)
        if not product:
            return None

        # Update only provided fields
        update_data = product_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    def count(self) -> int:
        """Get total count of products"""
        return self.db.query(Product).count()
