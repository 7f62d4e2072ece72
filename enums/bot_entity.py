from enum import Enum


class BotEntity(Enum):
    ADMIN = 1   # Staff-facing texts (order notifications, waiter calls)
    USER = 2    # Customer-facing texts (confirmations, validation errors)
    COMMON = 3
