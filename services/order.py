import asyncio
import logging
import random
from datetime import datetime, timedelta

import config
from db import get_db_session
from enums.bot_entity import BotEntity
from enums.delivery_mode import DeliveryMode
from enums.payment_method import PaymentMethod
from exceptions.cart import EmptyCartException
from exceptions.checkout import CheckoutIncompleteException
from exceptions.order import OrderNotificationFailedException, OrderPersistenceException
from models.cart import CartDTO
from models.checkout import DeliveryDTO, PaymentDTO
from models.discount import DiscountAllocationDTO
from models.order import OrderDTO, OrderLineDTO, OrderPlacementResultDTO
from repositories.order import OrderRepository
from services.checkout import CheckoutStateMachine
from services.discount import DiscountService
from services.notification import NotificationService
from services.order_formatter import OrderFormatterService
from utils.error_handler import handle_service_error, handle_unexpected_error
from utils.phone import digits_only

# running persistence tasks; each one removes itself when done
_background_tasks: set[asyncio.Task] = set()


class OrderService:

    @staticmethod
    def generate_order_number(now: datetime) -> str:
        """
        Generate a short, human-friendly order number.

        Format: prefix + last 6 digits of the epoch milliseconds + 3 random digits,
        e.g. "MZ482913057". Two orders collide only when placed in the same
        millisecond (mod ~16 minutes) and draw the same suffix.
        """
        timestamp = str(int(now.timestamp() * 1000))[-6:]
        suffix = str(random.randint(0, 999)).zfill(3)
        return f"{config.ORDER_NUMBER_PREFIX}{timestamp}{suffix}"

    @staticmethod
    def delivery_surcharge_for(mode: DeliveryMode) -> float:
        return config.DELIVERY_SURCHARGE if mode == DeliveryMode.DELIVER else 0.0

    @staticmethod
    def estimate_ready_at(mode: DeliveryMode, now: datetime) -> datetime:
        minutes = config.DELIVERY_ETA_MINUTES if mode == DeliveryMode.DELIVER else config.PICKUP_ETA_MINUTES
        return now + timedelta(minutes=minutes)

    @staticmethod
    def assemble(
        cart: CartDTO,
        allocations: list[DiscountAllocationDTO],
        checkout: CheckoutStateMachine,
        now: datetime
    ) -> OrderDTO:
        """
        Snapshot cart, discounts and checkout data into an immutable order.

        Pickup orders drop any address typed before switching modes; exact
        change cash payments record the grand total as the cash amount.

        Raises:
            EmptyCartException: If the cart has no lines
            CheckoutIncompleteException: If checkout is not at a valid review step
        """
        if cart.is_empty:
            raise EmptyCartException()
        if not checkout.is_complete():
            raise CheckoutIncompleteException(
                checkout.step.name,
                [step.name for step in checkout.invalid_steps()]
            )

        session = checkout.session
        delivery = session.delivery
        if delivery.mode == DeliveryMode.PICKUP:
            delivery = DeliveryDTO(mode=DeliveryMode.PICKUP)
        else:
            delivery = delivery.model_copy(update={"address": delivery.address.strip()})

        surcharge = OrderService.delivery_surcharge_for(delivery.mode)
        totals = DiscountService.compute_totals(cart.subtotal, surcharge, allocations)

        payment = session.payment
        if payment.method == PaymentMethod.CARD:
            payment = PaymentDTO(method=PaymentMethod.CARD)
        elif payment.exact_change:
            payment = payment.model_copy(update={"cash_amount": totals.grand_total})

        contact = session.contact.model_copy(update={
            "name": session.contact.name.strip(),
            "phone": digits_only(session.contact.phone),
        })

        return OrderDTO(
            order_number=OrderService.generate_order_number(now),
            lines=tuple(
                OrderLineDTO(
                    product_id=line.product.id,
                    name=line.product.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    subtotal=round(line.subtotal, 2),
                    customization=line.customization.summary(),
                )
                for line in cart.items
            ),
            subtotal=totals.subtotal,
            delivery_surcharge=totals.delivery_surcharge,
            discounts=tuple(allocations),
            discount_total=totals.discount_total,
            grand_total=totals.grand_total,
            contact=contact,
            delivery=delivery,
            payment=payment,
            notes=session.notes,
            created_at=now,
            estimated_ready_at=OrderService.estimate_ready_at(delivery.mode, now),
        )

    @staticmethod
    async def place_order(
        cart: CartDTO,
        allocations: list[DiscountAllocationDTO],
        checkout: CheckoutStateMachine,
        now: datetime
    ) -> OrderPlacementResultDTO:
        """
        Assemble the order and hand it to staff notification and persistence.

        Both dispatches start together. The order counts as placed when at
        least one notification recipient received it; persistence runs in the
        background and its outcome never changes the result. Nothing is
        retried or rolled back.

        Raises:
            EmptyCartException, CheckoutIncompleteException: From assemble()
        """
        order = OrderService.assemble(cart, allocations, checkout, now)
        logging.info(
            f"Placing order {order.order_number}: {order.item_count} items, "
            f"total {order.grand_total:.2f}, {order.delivery.mode.value}"
        )

        OrderService.dispatch_persistence(order)
        notification = await NotificationService.new_order(order)

        if not notification.success:
            error = OrderNotificationFailedException(order.order_number, notification.recipients_total)
            logging.error(str(error))
            return OrderPlacementResultDTO(
                success=False,
                message=handle_service_error(error, BotEntity.USER),
                order_number=order.order_number,
                recipients_notified=0,
            )

        return OrderPlacementResultDTO(
            success=True,
            message=OrderFormatterService.format_customer_confirmation(order),
            order_number=order.order_number,
            recipients_notified=notification.recipients_notified,
            order=order,
        )

    @staticmethod
    def dispatch_persistence(order: OrderDTO) -> asyncio.Task:
        """Store the order in the background (fire-and-forget)."""
        task = asyncio.create_task(OrderService._persist(order))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
        return task

    @staticmethod
    async def _persist(order: OrderDTO) -> int | None:
        try:
            async with get_db_session() as session:
                return await OrderRepository.create(order, session)
        except OrderPersistenceException as e:
            logging.error(str(e))
            return None
        except Exception as e:
            handle_unexpected_error(e, BotEntity.ADMIN)
            return None

    @staticmethod
    async def wait_for_background_tasks() -> None:
        """Wait for pending persistence tasks (used at shutdown)."""
        if _background_tasks:
            await asyncio.gather(*list(_background_tasks), return_exceptions=True)
