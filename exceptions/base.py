"""
Base exception classes for the storefront.
"""


class StorefrontException(Exception):
    """
    Base exception for all storefront errors.

    All custom exceptions should inherit from this class.
    This allows catching all storefront-specific exceptions with a single handler.

    Attributes:
        message: Human-readable error message
        details: Optional dict with additional context (line ids, promotion ids, etc.)
    """

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return self.message
