"""
Custom exceptions for the storefront.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
StorefrontException (base)
├── CartException
│   ├── EmptyCartException
│   ├── CartItemNotFoundException
│   └── InvalidQuantityException
├── PromotionException
│   └── InvalidPromotionException
├── CheckoutException
│   └── CheckoutIncompleteException
└── OrderException
    ├── OrderNotificationFailedException
    └── OrderPersistenceException

Usage:
------
Services raise specific exceptions:
    raise CartItemNotFoundException(line_id="a1b2")

Callers catch and display user-friendly messages:
    try:
        store.set_quantity(line_id, 3)
    except CartItemNotFoundException as e:
        message = handle_service_error(e, BotEntity.USER)
"""

from .base import StorefrontException
from .cart import CartException, EmptyCartException, CartItemNotFoundException, InvalidQuantityException
from .promotion import PromotionException, InvalidPromotionException
from .checkout import CheckoutException, CheckoutIncompleteException
from .order import OrderException, OrderNotificationFailedException, OrderPersistenceException

__all__ = [
    # Base
    'StorefrontException',

    # Cart
    'CartException',
    'EmptyCartException',
    'CartItemNotFoundException',
    'InvalidQuantityException',

    # Promotion
    'PromotionException',
    'InvalidPromotionException',

    # Checkout
    'CheckoutException',
    'CheckoutIncompleteException',

    # Order
    'OrderException',
    'OrderNotificationFailedException',
    'OrderPersistenceException',
]
