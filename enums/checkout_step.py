from enum import IntEnum


class CheckoutStep(IntEnum):
    """
    Ordered checkout steps.

    The integer value is the step index; forward navigation increments it,
    backward navigation decrements it.
    """

    CONTACT = 0
    DELIVERY = 1
    PAYMENT = 2
    REVIEW = 3

    @property
    def localization_key(self) -> str:
        return f"checkout_step_{self.name.lower()}"
