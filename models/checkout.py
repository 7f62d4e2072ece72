from pydantic import BaseModel, ConfigDict, Field, field_validator

from enums.checkout_step import CheckoutStep
from enums.delivery_mode import DeliveryMode
from enums.payment_method import PaymentMethod

# bills and coins offered on the payment step; any positive amount is still accepted
CASH_DENOMINATIONS = (20, 50, 100, 200, 500, 1000)


class ContactDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    phone: str = ""


class KnownCustomerDTO(BaseModel):
    """Identity of a logged-in customer; skips the contact step."""
    model_config = ConfigDict(frozen=True)

    name: str
    phone: str
    email: str | None = None


class CoordinatesDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class DeliveryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: DeliveryMode = DeliveryMode.PICKUP
    address: str | None = None
    coordinates: CoordinatesDTO | None = None


class PaymentDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: PaymentMethod = PaymentMethod.CASH
    cash_amount: float | None = None
    exact_change: bool = False

    @field_validator("cash_amount")
    @classmethod
    def non_negative_cash(cls, value):
        if value is not None and value < 0:
            raise ValueError("cash_amount cannot be negative")
        return value

    def change_due(self, grand_total: float) -> float | None:
        """
        Change the driver/cashier must bring, or None when not applicable.

        Card payments and exact-change cash payments need no change.
        """
        if self.method != PaymentMethod.CASH or self.exact_change or self.cash_amount is None:
            return None
        return round(self.cash_amount - grand_total, 2)


class CheckoutSession(BaseModel):
    """
    Data collected by the checkout flow.

    Only CheckoutStateMachine mutates a session; everyone else receives copies.
    errors maps a step to {field: localized message} for display.
    """
    step: CheckoutStep = CheckoutStep.CONTACT
    contact: ContactDTO = ContactDTO()
    delivery: DeliveryDTO = DeliveryDTO()
    payment: PaymentDTO = PaymentDTO()
    notes: str | None = None
    errors: dict[CheckoutStep, dict[str, str]] = {}
    known_customer: KnownCustomerDTO | None = None
