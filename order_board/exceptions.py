"""
Error taxonomy of the Order Board
"""


class OrderBoardError(Exception):
    """Base exception for order board errors"""
    pass


class ProductNotFoundError(OrderBoardError):
    """A product referenced by an order draft cannot be resolved"""

    def __init__(self, product_id: str, message: str = None):
        self.product_id = product_id
        super().__init__(message or f"Product {product_id} not found")


class OrderNotFoundError(OrderBoardError):
    """Order id is unknown to the store"""

    def __init__(self, order_id: str, message: str = None):
        self.order_id = order_id
        super().__init__(message or f"Order {order_id} not found")


class InvalidTransitionError(OrderBoardError):
    """Requested status change is not in the lifecycle transition table"""

    def __init__(self, current=None, requested=None, role=None, message: str = None):
        self.current = current
        self.requested = requested
        self.role = role
        if message is None:
            current_label = getattr(current, "value", current)
            requested_label = getattr(requested, "value", requested)
            message = f"Cannot move order from '{current_label}' to '{requested_label}'"
            if role is not None:
                message += f" as {getattr(role, 'value', role)}"
        super().__init__(message)


class StoreUnavailableError(OrderBoardError):
    """Order store could not be reached"""
    pass


class ProductServiceError(OrderBoardError):
    """Base exception for product catalog errors"""
    pass


class ProductServiceUnavailableError(ProductServiceError):
    """Product catalog is unavailable"""
    pass


class OrderAssemblyError(OrderBoardError):
    """Cart cannot be submitted in its current state"""
    pass
