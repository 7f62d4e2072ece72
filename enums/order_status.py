from enum import Enum


class OrderStatus(Enum):
    PENDING = "pending"         # Received from the web storefront, not yet accepted by the kitchen
    PREPARING = "preparing"     # Accepted by staff
    READY = "ready"             # Ready for pickup / out for delivery
    COMPLETED = "completed"
    CANCELLED = "cancelled"
