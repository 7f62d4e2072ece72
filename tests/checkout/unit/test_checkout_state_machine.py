"""
Unit Tests: CheckoutStateMachine

Tests for services/checkout.py covering:
- next() / back() navigation and the step-scoped error map
- contact, delivery and payment validation gates
- known customers starting at the delivery step
- reset() and waiter call detection
"""

import pytest

from enums.checkout_step import CheckoutStep
from enums.delivery_mode import DeliveryMode
from enums.payment_method import PaymentMethod
from models.checkout import KnownCustomerDTO
from services.checkout import CheckoutStateMachine


@pytest.fixture
def machine():
    return CheckoutStateMachine()


def fill_contact(machine: CheckoutStateMachine):
    machine.update_contact(name="Ana López", phone="55-1234-5678")
    assert machine.next() is True


class TestContactStep:

    def test_starts_at_contact(self, machine):
        assert machine.step == CheckoutStep.CONTACT

    def test_missing_name_and_phone_block(self, machine):
        assert machine.next() is False

        assert machine.step == CheckoutStep.CONTACT
        assert set(machine.errors[CheckoutStep.CONTACT]) == {"name", "phone"}
        assert machine.errors[CheckoutStep.CONTACT]["name"] == "El nombre es requerido"

    def test_phone_digits_counted_after_stripping(self, machine):
        machine.update_contact(name="Ana", phone="(55) 1234-567")
        assert machine.next() is False
        assert machine.errors[CheckoutStep.CONTACT]["phone"] == "El teléfono debe tener 10 dígitos"

        machine.update_contact(phone="(55) 1234-5678")
        assert machine.next() is True
        assert machine.step == CheckoutStep.DELIVERY
        assert CheckoutStep.CONTACT not in machine.errors

    def test_whitespace_name_rejected(self, machine):
        machine.update_contact(name="   ", phone="5512345678")

        assert machine.next() is False
        assert "name" in machine.errors[CheckoutStep.CONTACT]


class TestDeliveryStep:

    def test_deliver_requires_address(self, machine):
        fill_contact(machine)
        machine.update_delivery(mode=DeliveryMode.DELIVER)

        assert machine.next() is False
        assert machine.step == CheckoutStep.DELIVERY
        assert "address" in machine.errors[CheckoutStep.DELIVERY]

        machine.update_delivery(address="Av. Reforma 123, Col. Centro")
        assert machine.next() is True
        assert machine.step == CheckoutStep.PAYMENT

    def test_pickup_requires_nothing(self, machine):
        fill_contact(machine)

        assert machine.session.delivery.mode == DeliveryMode.PICKUP
        assert machine.next() is True


class TestPaymentStep:

    @pytest.fixture
    def at_payment(self, machine):
        fill_contact(machine)
        assert machine.next() is True
        return machine

    def test_cash_without_amount_blocks(self, at_payment):
        assert at_payment.next() is False
        assert "cash_amount" in at_payment.errors[CheckoutStep.PAYMENT]

    def test_exact_change_passes_without_amount(self, at_payment):
        at_payment.next()
        at_payment.update_payment(exact_change=True)

        assert at_payment.next() is True
        assert at_payment.step == CheckoutStep.REVIEW

    def test_cash_amount_passes(self, at_payment):
        at_payment.update_payment(cash_amount=500)

        assert at_payment.next() is True

    def test_card_requires_nothing(self, at_payment):
        at_payment.update_payment(method=PaymentMethod.CARD)

        assert at_payment.next() is True

    def test_negative_cash_rejected_at_input(self, at_payment):
        with pytest.raises(ValueError):
            at_payment.update_payment(cash_amount=-20)


class TestNavigation:

    def test_next_capped_at_review(self, machine):
        fill_contact(machine)
        machine.next()
        machine.update_payment(method=PaymentMethod.CARD)
        machine.next()

        assert machine.next() is True
        assert machine.step == CheckoutStep.REVIEW
        assert machine.is_complete() is True

    def test_back_keeps_data_and_floors_at_contact(self, machine):
        fill_contact(machine)
        machine.update_delivery(mode=DeliveryMode.DELIVER, address="Calle 5")

        assert machine.back() == CheckoutStep.CONTACT
        assert machine.back() == CheckoutStep.CONTACT
        assert machine.session.contact.name == "Ana López"
        assert machine.session.delivery.address == "Calle 5"

    def test_unknown_field_rejected(self, machine):
        with pytest.raises(ValueError):
            machine.update_contact(email="ana@example.com")

    def test_session_is_a_copy(self, machine):
        session = machine.session
        session.notes = "changed"

        assert machine.session.notes is None

    def test_notes_blank_becomes_none(self, machine):
        machine.set_notes("  sin wasabi  ")
        assert machine.session.notes == "sin wasabi"

        machine.set_notes("   ")
        assert machine.session.notes is None

    def test_reset_clears_everything(self, machine):
        machine.next()
        fill_contact(machine)
        machine.set_notes("extra soya")

        machine.reset()

        assert machine.step == CheckoutStep.CONTACT
        assert machine.errors == {}
        assert machine.session.contact.name == ""
        assert machine.session.notes is None

    def test_not_complete_before_review(self, machine):
        fill_contact(machine)
        assert machine.is_complete() is False


class TestKnownCustomer:

    @pytest.fixture
    def known(self):
        return CheckoutStateMachine(KnownCustomerDTO(name="Luis", phone="5598765432"))

    def test_starts_at_delivery_with_prefilled_contact(self, known):
        assert known.step == CheckoutStep.DELIVERY
        assert known.session.contact.name == "Luis"
        assert known.validate_step(CheckoutStep.CONTACT) == {}

    def test_reset_returns_to_delivery(self, known):
        known.next()
        known.reset()

        assert known.step == CheckoutStep.DELIVERY
        assert known.session.contact.phone == "5598765432"

    def test_never_a_waiter_call(self, known):
        known.back()
        known.update_contact(name="cc")

        assert known.is_waiter_call() is False


class TestWaiterCall:

    @pytest.mark.parametrize("name,expected", [
        ("cc", True),
        (" CC ", True),
        ("ccc", False),
        ("Carla", False),
    ])
    def test_keyword_on_contact_step(self, machine, name, expected):
        machine.update_contact(name=name)
        assert machine.is_waiter_call() is expected

    def test_only_on_contact_step(self, machine):
        fill_contact(machine)
        machine.back()
        machine.next()
        machine.update_contact(name="cc")

        assert machine.step == CheckoutStep.DELIVERY
        assert machine.is_waiter_call() is False

    def test_keyword_passes_contact_validation_without_phone(self, machine):
        machine.update_contact(name="cc")

        assert machine.validate_step(CheckoutStep.CONTACT) == {}

    def test_validation_resumes_once_name_changes(self, machine):
        machine.update_contact(name="cc")
        machine.update_contact(name="Carla")

        assert set(machine.validate_step(CheckoutStep.CONTACT)) == {"phone"}
