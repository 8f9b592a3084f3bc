"""
SQLAlchemy Order and OrderLine models
"""
import time
import uuid

from sqlalchemy import Column, Integer, BigInteger, String, Numeric, Text, Enum, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from order_board.database import Base
from order_board.schemas.order import OrderStatus


def epoch_ms() -> int:
    """Current time in epoch milliseconds"""
    return int(time.time() * 1000)


def new_order_id() -> str:
    return str(uuid.uuid4())


class Order(Base):
    """Order database model"""

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_order_id)
    table_identifier = Column(String(50), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(
            OrderStatus,
            name="order_status",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses]
        ),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True
    )
    notes = Column(Text, nullable=True)
    created_at = Column(BigInteger, nullable=False, default=epoch_ms, index=True)
    updated_at = Column(BigInteger, nullable=False, default=epoch_ms)

    items = relationship(
        "OrderLine",
        order_by="OrderLine.position",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint('total_amount >= 0', name='check_total_non_negative'),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, table='{self.table_identifier}', status='{self.status}')>"


class OrderLine(Base):
    """Order line with the product name and price frozen at creation"""

    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(String(36), nullable=False)  # No FK: catalog edits must not touch history
    product_name = Column(String(255), nullable=False)
    price_at_order = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )

    def __repr__(self):
        return f"<OrderLine(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
