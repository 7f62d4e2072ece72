"""
Checkout-related exceptions.

Step validation failures are not exceptions: they are stored in the
checkout session's error map. These exceptions cover attempts to finish
a checkout that is not ready.
"""

from .base import StorefrontException


class CheckoutException(StorefrontException):
    """Base exception for checkout-related errors."""
    pass


class CheckoutIncompleteException(CheckoutException):
    """Raised when an order is assembled before the review step is reached and valid."""

    def __init__(self, current_step: str, invalid_steps: list[str] | None = None):
        invalid_steps = invalid_steps or []
        message = f"Checkout is not complete (current step: {current_step})"
        if invalid_steps:
            message += f", invalid steps: {', '.join(invalid_steps)}"
        super().__init__(
            message,
            details={'current_step': current_step, 'invalid_steps': invalid_steps}
        )
        self.current_step = current_step
        self.invalid_steps = invalid_steps
