from enum import Enum


class DeliveryMode(str, Enum):
    PICKUP = "pickup"     # Customer collects at the branch
    DELIVER = "deliver"   # Delivered to an address (surcharge applies)
