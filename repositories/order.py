import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit, session_refresh
from enums.order_status import OrderStatus
from exceptions.order import OrderPersistenceException
from models.order import OrderDTO, WebOrder, WebOrderItem

logger = logging.getLogger(__name__)


class OrderRepository:

    @staticmethod
    async def create(order: OrderDTO, session: AsyncSession) -> int:
        """
        Store an order snapshot for the POS.

        Returns:
            Database id of the new web order

        Raises:
            OrderPersistenceException: If the insert fails
        """
        web_order = WebOrder(
            order_number=order.order_number,
            status=OrderStatus.PENDING,
            origin="web",
            client_name=order.contact.name,
            client_phone=order.contact.phone,
            delivery_mode=order.delivery.mode,
            delivery_address=order.delivery.address,
            latitude=order.delivery.coordinates.lat if order.delivery.coordinates else None,
            longitude=order.delivery.coordinates.lng if order.delivery.coordinates else None,
            payment_method=order.payment.method,
            cash_amount=order.payment.cash_amount,
            exact_change=int(order.payment.exact_change),
            subtotal=order.subtotal,
            delivery_surcharge=order.delivery_surcharge,
            discount_total=order.discount_total,
            grand_total=order.grand_total,
            discounts_json=json.dumps(order.to_payload()["discounts"], ensure_ascii=False),
            notes=order.notes,
            created_at=order.created_at,
            estimated_ready_at=order.estimated_ready_at,
            items=[
                WebOrderItem(
                    product_id=line.product_id,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    subtotal=line.subtotal,
                    customization=line.customization or None,
                )
                for line in order.lines
            ],
        )
        try:
            session.add(web_order)
            await session_commit(session)
            await session_refresh(session, web_order)
        except SQLAlchemyError as e:
            await session.rollback()
            raise OrderPersistenceException(order.order_number, str(e)) from e

        logger.info(f"Stored order {order.order_number} as web order {web_order.id}")
        return web_order.id
