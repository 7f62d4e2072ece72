"""
Error Handler Utility

Converts storefront exceptions into localized messages with:
- Localized error messages
- Consistent customer experience
- Automatic exception to message mapping
- Logging for debugging

Usage:
    from utils.error_handler import handle_service_error

    try:
        session.set_quantity(line_id, 2)
    except StorefrontException as e:
        error_message = handle_service_error(e, BotEntity.USER)
"""

import logging

from enums.bot_entity import BotEntity
from exceptions import (
    StorefrontException,
    EmptyCartException,
    CartItemNotFoundException,
    InvalidQuantityException,
    InvalidPromotionException,
    CheckoutIncompleteException,
    OrderNotificationFailedException,
    OrderPersistenceException,
)
from utils.localizator import Localizator


def handle_service_error(exception: StorefrontException, entity: BotEntity = BotEntity.USER) -> str:
    """
    Convert service exception to localized user-friendly error message.

    Args:
        exception: The custom exception raised by a service
        entity: Bot entity for localization (ADMIN or USER)

    Returns:
        Localized error message string
    """
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    error_mapping = {
        # Cart exceptions
        EmptyCartException: "error_empty_cart",
        CartItemNotFoundException: "error_cart_item_not_found",
        InvalidQuantityException: "error_invalid_quantity",

        # Promotion exceptions
        InvalidPromotionException: "error_invalid_promotion",

        # Checkout exceptions
        CheckoutIncompleteException: "error_checkout_incomplete",

        # Order exceptions
        OrderNotificationFailedException: "error_order_not_submitted",
        OrderPersistenceException: "error_order_not_saved",
    }

    localization_key = error_mapping.get(type(exception))

    if not localization_key:
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(entity, "error_unexpected")

    exception_data = dict(exception.details)
    for attribute in ('line_id', 'quantity', 'order_number', 'reason', 'current_step'):
        if hasattr(exception, attribute):
            exception_data[attribute] = getattr(exception, attribute)

    try:
        return Localizator.get_text(entity, localization_key).format(**exception_data)
    except KeyError as e:
        # Missing formatting parameter - log and return without formatting
        logging.error(f"Missing format parameter in error message: {e}")
        return Localizator.get_text(entity, localization_key)


def handle_unexpected_error(exception: Exception, entity: BotEntity = BotEntity.USER) -> str:
    """
    Handle unexpected exceptions (non-StorefrontException).

    Also logs the full exception for debugging.
    """
    logging.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return Localizator.get_text(entity, "error_unexpected")
