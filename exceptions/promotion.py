"""
Promotion-related exceptions.
"""

from .base import StorefrontException


class PromotionException(StorefrontException):
    """Base exception for promotion-related errors."""
    pass


class InvalidPromotionException(PromotionException):
    """Raised when a promotion record from the catalog cannot be parsed."""

    def __init__(self, promotion_id: int | None, reason: str):
        super().__init__(
            f"Invalid promotion {promotion_id}: {reason}",
            details={'promotion_id': promotion_id, 'reason': reason}
        )
        self.promotion_id = promotion_id
        self.reason = reason
