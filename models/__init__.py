"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for relationships to work correctly.
"""

from models.base import Base
from models.promotion import Promotion, PromotionItem
from models.order import WebOrder, WebOrderItem

__all__ = [
    'Base',
    'Promotion',
    'PromotionItem',
    'WebOrder',
    'WebOrderItem',
]
