"""
Cart-related exceptions.
"""

from .base import StorefrontException


class CartException(StorefrontException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when trying to place an order with an empty cart."""

    def __init__(self):
        super().__init__(
            "Cart is empty",
            details={}
        )


class CartItemNotFoundException(CartException):
    """Raised when a line id does not exist in the cart."""

    def __init__(self, line_id: str):
        super().__init__(
            f"Cart line {line_id} not found",
            details={'line_id': line_id}
        )
        self.line_id = line_id


class InvalidQuantityException(CartException):
    """Raised when adding a non-positive quantity to the cart."""

    def __init__(self, quantity: int):
        super().__init__(
            f"Quantity must be positive (got: {quantity})",
            details={'quantity': quantity}
        )
        self.quantity = quantity
