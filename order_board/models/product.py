"""
SQLAlchemy Product model
"""
import uuid

from sqlalchemy import Column, String, Numeric, Text, Boolean, CheckConstraint

from order_board.database import Base


class Product(Base):
    """Product database model"""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=True, index=True)
    is_available = Column(Boolean, nullable=False, default=True)

    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_positive'),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
