"""
Order Formatter Service

Builds the HTML messages sent over Telegram:
- Staff notification for a new order
- Customer confirmation shown after a successful submission
- Waiter call with the current cart

Customer-provided text (names, addresses, notes, customization notes) is
always escaped with safe_html; localized templates are not.
"""

from datetime import datetime

import config
from enums.bot_entity import BotEntity
from enums.delivery_mode import DeliveryMode
from enums.payment_method import PaymentMethod
from models.cart import CartDTO
from models.order import OrderDTO
from utils.html_escape import safe_html
from utils.localizator import Localizator
from utils.phone import format_phone


class OrderFormatterService:

    @staticmethod
    def format_datetime(value: datetime, lang: str | None = None) -> str:
        return value.strftime(Localizator.get_text(BotEntity.COMMON, "date_format", lang=lang))

    @staticmethod
    def format_time(value: datetime | None, lang: str | None = None) -> str:
        if value is None:
            return ""
        return value.strftime(Localizator.get_text(BotEntity.COMMON, "time_format", lang=lang))

    @staticmethod
    def format_staff_notification(order: OrderDTO, lang: str | None = None) -> str:
        """
        Format the full order for kitchen/staff chats.

        Sections: header, customer, delivery, payment, products, summary,
        notes (optional), estimated time footer.
        """
        def text(key: str, **kwargs) -> str:
            return Localizator.get_text(BotEntity.ADMIN, key, lang=lang).format(**kwargs)

        money = Localizator.format_money
        eta = OrderFormatterService.format_time(order.estimated_ready_at, lang)

        lines = [
            text("new_order_header", store_name=safe_html(config.STORE_NAME)),
            "",
            text("order_number_line", order_number=order.order_number),
            text("order_date_line", date=OrderFormatterService.format_datetime(order.created_at, lang)),
            "",
            text("customer_section"),
            text("customer_name", name=safe_html(order.contact.name)),
            text("customer_phone", phone=format_phone(order.contact.phone)),
            "",
            text("delivery_section"),
        ]

        if order.delivery.mode == DeliveryMode.PICKUP:
            lines.append(text("delivery_pickup"))
        else:
            lines.append(text("delivery_deliver"))
            address = order.delivery.address or text("delivery_address_missing")
            lines.append(text("delivery_address", address=safe_html(address)))
            if order.delivery.coordinates:
                lines.append(text(
                    "delivery_coordinates",
                    lat=order.delivery.coordinates.lat,
                    lng=order.delivery.coordinates.lng
                ))
        if eta:
            lines.append(text("eta_line", eta=eta))
        lines.append("")

        lines.append(text("payment_section"))
        if order.payment.method == PaymentMethod.CASH:
            lines.append(text("payment_cash"))
            if order.payment.exact_change:
                lines.append(text("payment_exact", amount=money(order.grand_total)))
            elif order.payment.cash_amount is not None:
                lines.append(text("payment_cash_amount", amount=money(order.payment.cash_amount)))
                lines.append(text("payment_change", amount=money(order.payment.change_due(order.grand_total))))
        else:
            lines.append(text("payment_card"))
        lines.append("")

        lines.append(text("products_section"))
        for index, line in enumerate(order.lines, start=1):
            lines.append(text("product_line", index=index, name=safe_html(line.name)))
            lines.append(text("product_quantity", quantity=line.quantity))
            lines.append(text("product_unit_price", amount=money(line.unit_price)))
            lines.append(text("product_subtotal", amount=money(line.subtotal)))
            if line.customization:
                lines.append(text("product_customization", summary=safe_html(line.customization)))
            lines.append("")

        lines.append(text("summary_section"))
        lines.append(text("summary_subtotal", amount=money(order.subtotal)))
        if order.delivery_surcharge > 0:
            lines.append(text("summary_delivery", amount=money(order.delivery_surcharge)))
        for allocation in order.discounts:
            lines.append(text(
                "summary_discount",
                promotion_name=safe_html(allocation.promotion_name),
                free_units=allocation.free_units,
                amount=money(allocation.amount)
            ))
        lines.append(text("summary_total", amount=money(order.grand_total)))
        lines.append("")

        if order.notes:
            lines.append(text("notes_section"))
            lines.append(safe_html(order.notes))
            lines.append("")

        if eta:
            lines.append(text("eta_footer", eta=eta))

        return "\n".join(lines).strip()

    @staticmethod
    def format_customer_confirmation(order: OrderDTO, lang: str | None = None) -> str:
        def text(key: str, **kwargs) -> str:
            return Localizator.get_text(BotEntity.USER, key, lang=lang).format(**kwargs)

        money = Localizator.format_money
        eta = OrderFormatterService.format_time(order.estimated_ready_at, lang)

        lines = [
            text("confirmation_header", name=safe_html(order.contact.name), order_number=order.order_number),
            text("confirmation_total", amount=money(order.grand_total)),
        ]
        if order.discount_total > 0:
            lines.append(text("confirmation_discount", amount=money(order.discount_total)))
        if order.delivery.mode == DeliveryMode.PICKUP:
            lines.append(text("confirmation_pickup", eta=eta))
        else:
            lines.append(text("confirmation_deliver", address=safe_html(order.delivery.address), eta=eta))
        change = order.payment.change_due(order.grand_total)
        if change is not None and change > 0:
            lines.append(text("confirmation_change", amount=money(change)))
        return "\n".join(lines)

    @staticmethod
    def format_waiter_call(cart: CartDTO, now: datetime, lang: str | None = None) -> str:
        def text(key: str, **kwargs) -> str:
            return Localizator.get_text(BotEntity.ADMIN, key, lang=lang).format(**kwargs)

        lines = [
            text("waiter_call_header", store_name=safe_html(config.STORE_NAME)),
            text("waiter_call_date", date=OrderFormatterService.format_datetime(now, lang)),
            "",
        ]
        if cart.is_empty:
            lines.append(text("waiter_call_empty"))
            return "\n".join(lines)

        for line in cart.items:
            lines.append(text("waiter_call_item", quantity=line.quantity, name=safe_html(line.product.name)))
        lines.append("")
        lines.append(text("waiter_call_total", amount=Localizator.format_money(cart.subtotal)))
        return "\n".join(lines)
