"""
Checkout state machine.

Walks a customer through four ordered steps and gates forward navigation
on each step's data:

    CONTACT -> DELIVERY -> PAYMENT -> REVIEW

- next() validates the current step; invalid data keeps the step and fills
  the error map, valid data clears the step's errors and advances
- back() is always allowed and keeps everything entered so far
- customers with a known identity start at DELIVERY with contact prefilled
"""

import logging

import config
from enums.bot_entity import BotEntity
from enums.checkout_step import CheckoutStep
from enums.delivery_mode import DeliveryMode
from enums.payment_method import PaymentMethod
from models.checkout import (
    CheckoutSession,
    ContactDTO,
    DeliveryDTO,
    PaymentDTO,
    KnownCustomerDTO,
)
from utils.localizator import Localizator
from utils.phone import digits_only, is_valid_phone

logger = logging.getLogger(__name__)


class CheckoutStateMachine:

    FIRST_STEP = CheckoutStep.CONTACT
    LAST_STEP = CheckoutStep.REVIEW

    def __init__(self, known_customer: KnownCustomerDTO | None = None):
        self._known_customer = known_customer
        self._session = self._initial_session()

    # ------------------------------------------------------------------
    # Read access (copies only)
    # ------------------------------------------------------------------

    @property
    def session(self) -> CheckoutSession:
        return self._session.model_copy(deep=True)

    @property
    def step(self) -> CheckoutStep:
        return self._session.step

    @property
    def errors(self) -> dict[CheckoutStep, dict[str, str]]:
        return {step: dict(fields) for step, fields in self._session.errors.items()}

    @property
    def known_customer(self) -> KnownCustomerDTO | None:
        return self._known_customer

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def update_contact(self, **changes) -> ContactDTO:
        """Update contact fields (name, phone)."""
        self._session.contact = self._merge(self._session.contact, changes)
        return self._session.contact

    def update_delivery(self, **changes) -> DeliveryDTO:
        """Update delivery fields (mode, address, coordinates)."""
        self._session.delivery = self._merge(self._session.delivery, changes)
        return self._session.delivery

    def update_payment(self, **changes) -> PaymentDTO:
        """Update payment fields (method, cash_amount, exact_change)."""
        self._session.payment = self._merge(self._session.payment, changes)
        return self._session.payment

    def set_notes(self, notes: str | None) -> None:
        notes = notes.strip() if notes else None
        self._session.notes = notes or None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> bool:
        """
        Validate the current step and advance when it passes.

        Returns:
            True if the step was valid (the step index is capped at REVIEW),
            False if validation failed and the step did not change
        """
        current = self._session.step
        step_errors = self.validate_step(current)
        if step_errors:
            self._session.errors[current] = step_errors
            logger.info(f"Checkout step {current.name} blocked: {', '.join(step_errors)}")
            return False

        self._session.errors.pop(current, None)
        if current < self.LAST_STEP:
            self._session.step = CheckoutStep(current + 1)
        return True

    def back(self) -> CheckoutStep:
        """Go to the previous step (floored at CONTACT); entered data is kept."""
        if self._session.step > self.FIRST_STEP:
            self._session.step = CheckoutStep(self._session.step - 1)
        return self._session.step

    def reset(self) -> None:
        """Return to the initial state, dropping collected data and errors."""
        self._session = self._initial_session()
        logger.debug("Checkout session reset")

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_step(self, step: CheckoutStep) -> dict[str, str]:
        """
        Validate one step without changing state.

        Returns:
            {field: localized message}; empty when the step is valid
        """
        if step == CheckoutStep.CONTACT:
            return self._validate_contact()
        if step == CheckoutStep.DELIVERY:
            return self._validate_delivery()
        if step == CheckoutStep.PAYMENT:
            return self._validate_payment()
        return {}

    def invalid_steps(self) -> list[CheckoutStep]:
        return [step for step in CheckoutStep if self.validate_step(step)]

    def is_complete(self) -> bool:
        return self._session.step == self.LAST_STEP and not self.invalid_steps()

    def is_waiter_call(self) -> bool:
        """
        True when an anonymous customer typed the waiter keyword as their
        name on the contact step.
        """
        if self._known_customer is not None or self._session.step != CheckoutStep.CONTACT:
            return False
        keyword = config.WAITER_CALL_KEYWORD
        return bool(keyword) and self._session.contact.name.strip().lower() == keyword

    def _validate_contact(self) -> dict[str, str]:
        if self._known_customer is not None or self.is_waiter_call():
            return {}
        contact = self._session.contact
        errors = {}
        if not contact.name.strip():
            errors["name"] = Localizator.get_text(BotEntity.USER, "error_contact_name_required")
        if not digits_only(contact.phone):
            errors["phone"] = Localizator.get_text(BotEntity.USER, "error_contact_phone_required")
        elif not is_valid_phone(contact.phone):
            errors["phone"] = Localizator.get_text(BotEntity.USER, "error_contact_phone_invalid")
        return errors

    def _validate_delivery(self) -> dict[str, str]:
        delivery = self._session.delivery
        if delivery.mode == DeliveryMode.DELIVER and not (delivery.address or "").strip():
            return {"address": Localizator.get_text(BotEntity.USER, "error_delivery_address_required")}
        return {}

    def _validate_payment(self) -> dict[str, str]:
        payment = self._session.payment
        if payment.method != PaymentMethod.CASH or payment.exact_change:
            return {}
        if not payment.cash_amount:
            return {"cash_amount": Localizator.get_text(BotEntity.USER, "error_payment_cash_required")}
        return {}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _initial_session(self) -> CheckoutSession:
        if self._known_customer is None:
            return CheckoutSession()
        return CheckoutSession(
            step=CheckoutStep.DELIVERY,
            contact=ContactDTO(name=self._known_customer.name, phone=self._known_customer.phone),
            known_customer=self._known_customer,
        )

    @staticmethod
    def _merge(dto, changes: dict):
        unknown = set(changes) - set(type(dto).model_fields)
        if unknown:
            raise ValueError(f"Unknown {type(dto).__name__} fields: {', '.join(sorted(unknown))}")
        return type(dto).model_validate({**dto.model_dump(), **changes})
