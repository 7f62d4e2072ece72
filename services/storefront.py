"""
Per-customer storefront session.

Owns the cart, the checkout flow and the promotion snapshot for one
customer, and keeps discount allocations in sync with the cart: every cart
mutation recomputes allocations at the session clock's current instant.
"""

import logging

from db import get_db_session
from enums.bot_entity import BotEntity
from enums.delivery_mode import DeliveryMode
from enums.checkout_step import CheckoutStep
from models.cart import CartDTO, LineItemDTO
from models.checkout import CASH_DENOMINATIONS, KnownCustomerDTO
from models.discount import DiscountAllocationDTO, OrderTotalsDTO
from models.order import OrderPlacementResultDTO, WaiterCallResultDTO
from models.product import ProductDTO, CustomizationDTO
from models.promotion import PromotionRuleDTO
from repositories.promotion import PromotionRepository
from services.cart import CartStore
from services.checkout import CheckoutStateMachine
from services.discount import DiscountService
from services.notification import NotificationService
from services.order import OrderService
from utils.clock import Clock, SystemClock
from utils.localizator import Localizator

logger = logging.getLogger(__name__)


class StorefrontSession:

    def __init__(
        self,
        promotions: list[PromotionRuleDTO] | None = None,
        known_customer: KnownCustomerDTO | None = None,
        clock: Clock | None = None
    ):
        self.clock = clock or SystemClock()
        self.cart_store = CartStore()
        self.checkout = CheckoutStateMachine(known_customer)
        self._promotions = list(promotions or [])
        self._allocations: list[DiscountAllocationDTO] = []
        self._allocations_revision = -1
        self.last_waiter_call: WaiterCallResultDTO | None = None
        self._recompute()

    @classmethod
    async def start(
        cls,
        known_customer: KnownCustomerDTO | None = None,
        clock: Clock | None = None
    ) -> "StorefrontSession":
        """Open a session with the promotions currently active in the database."""
        async with get_db_session() as session:
            promotions = await PromotionRepository.get_active(session)
        logger.info(f"Storefront session started with {len(promotions)} active promotions")
        return cls(promotions, known_customer, clock)

    async def refresh_promotions(self) -> None:
        async with get_db_session() as session:
            self._promotions = await PromotionRepository.get_active(session)
        self._recompute()

    # ------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------

    @property
    def cart(self) -> CartDTO:
        return self.cart_store.cart

    @property
    def promotions(self) -> list[PromotionRuleDTO]:
        return list(self._promotions)

    @property
    def allocations(self) -> list[DiscountAllocationDTO]:
        if self._allocations_revision != self.cart_store.revision:
            self._recompute()
        return list(self._allocations)

    @property
    def delivery_surcharge(self) -> float:
        return OrderService.delivery_surcharge_for(self.checkout.session.delivery.mode)

    @property
    def totals(self) -> OrderTotalsDTO:
        return DiscountService.compute_totals(self.cart.subtotal, self.delivery_surcharge, self.allocations)

    def add_item(
        self,
        product: ProductDTO,
        customization: CustomizationDTO | None = None,
        quantity: int = 1
    ) -> LineItemDTO:
        line = self.cart_store.add_item(product, customization, quantity)
        self._recompute()
        return line

    def set_quantity(self, line_id: str, quantity: int) -> LineItemDTO | None:
        line = self.cart_store.set_quantity(line_id, quantity)
        self._recompute()
        return line

    def remove_item(self, line_id: str) -> None:
        self.cart_store.remove_item(line_id)
        self._recompute()

    def clear_cart(self) -> None:
        self.cart_store.clear()
        self._recompute()

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    async def next_step(self) -> bool:
        """
        Advance checkout to the next step.

        When an anonymous customer types the waiter keyword as their name on
        the contact step, a waiter is called instead of validating the step.
        The outcome is kept in `last_waiter_call` and the step does not advance.
        """
        if self.checkout.is_waiter_call():
            await self.call_waiter()
            return False
        return self.checkout.next()

    def previous_step(self) -> CheckoutStep:
        return self.checkout.back()

    def select_delivery_mode(self, mode: DeliveryMode) -> None:
        self.checkout.update_delivery(mode=mode)

    def cash_options(self) -> list[tuple[int, float]]:
        """Denominations that cover the grand total, with the change each leaves."""
        grand_total = self.totals.grand_total
        return [
            (denomination, round(denomination - grand_total, 2))
            for denomination in CASH_DENOMINATIONS
            if denomination >= grand_total
        ]

    def close_checkout(self) -> None:
        """Cart view closed or cancelled: discard checkout progress, keep the cart."""
        self.checkout.reset()

    async def call_waiter(self) -> WaiterCallResultDTO | None:
        """
        Send the current cart to staff as a waiter call instead of an order.

        Returns None without sending anything unless the contact name is the
        waiter keyword. Checkout is reset only when at least one recipient got
        the call.
        """
        if not self.checkout.is_waiter_call():
            logger.info("Waiter call ignored: contact name is not the waiter keyword")
            return None
        notification = await NotificationService.waiter_call(self.cart, self.clock.now())
        if notification.success:
            self.checkout.reset()
            message = Localizator.get_text(BotEntity.USER, "waiter_called")
        else:
            logger.error(
                f"Waiter call reached none of {notification.recipients_total} recipients"
            )
            message = Localizator.get_text(BotEntity.USER, "error_waiter_call_failed")
        self.last_waiter_call = WaiterCallResultDTO(
            success=notification.success,
            message=message,
            recipients_notified=notification.recipients_notified,
        )
        return self.last_waiter_call

    async def place_order(self) -> OrderPlacementResultDTO:
        """
        Place the order at the session clock's current instant.

        Discounts are re-evaluated first so promotion windows are checked at
        placement time. On success the cart is cleared and checkout reset;
        on failure both are kept so the customer can retry.
        """
        now = self.clock.now()
        self._recompute(now)
        result = await OrderService.place_order(self.cart, list(self._allocations), self.checkout, now)
        if result.success:
            self.cart_store.clear()
            self.checkout.reset()
            self._recompute(now)
        return result

    def _recompute(self, now=None) -> None:
        now = now or self.clock.now()
        self._allocations = DiscountService.compute_discounts(self.cart, self._promotions, now)
        self._allocations_revision = self.cart_store.revision
