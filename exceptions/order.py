"""
Order-related exceptions.
"""

from .base import StorefrontException


class OrderException(StorefrontException):
    """Base exception for order-related errors."""
    pass


class OrderNotificationFailedException(OrderException):
    """Raised when no notification recipient accepted the order message."""

    def __init__(self, order_number: str, recipients: int):
        super().__init__(
            f"Order {order_number} could not be sent to any of {recipients} recipients",
            details={'order_number': order_number, 'recipients': recipients}
        )
        self.order_number = order_number
        self.recipients = recipients


class OrderPersistenceException(OrderException):
    """Raised by the repository when an order snapshot cannot be stored."""

    def __init__(self, order_number: str, reason: str):
        super().__init__(
            f"Failed to store order {order_number}: {reason}",
            details={'order_number': order_number, 'reason': reason}
        )
        self.order_number = order_number
        self.reason = reason
