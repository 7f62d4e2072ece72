import asyncio
import logging
from datetime import datetime

import config
from bot_instance import get_bot
from models.cart import CartDTO
from models.order import OrderDTO, NotificationResultDTO
from services.order_formatter import OrderFormatterService


class NotificationService:
    """
    Sends staff notifications over Telegram.

    Messages go to every configured recipient concurrently. Delivery counts
    as successful when at least one recipient received it; failures for
    individual recipients are logged and never raised.
    """

    @staticmethod
    async def send_to_recipient(message: str, recipient: str) -> bool:
        bot = get_bot()
        try:
            await bot.send_message(recipient, message)
            return True
        except Exception as e:
            logging.error(f"Failed to notify recipient {recipient}: {e}")
            return False

    @staticmethod
    async def send_to_recipients(message: str, recipients: list[str] | None = None) -> NotificationResultDTO:
        """
        Send one message to all recipients at once and aggregate the results.

        Args:
            message: HTML formatted message
            recipients: Chat ids / @usernames (default: config.NOTIFICATION_RECIPIENTS)

        Returns:
            NotificationResultDTO with success = at least one recipient notified
        """
        recipients = list(recipients if recipients is not None else config.NOTIFICATION_RECIPIENTS)
        results = await asyncio.gather(
            *(NotificationService.send_to_recipient(message, recipient) for recipient in recipients),
            return_exceptions=True
        )

        failed = []
        for recipient, result in zip(recipients, results):
            if isinstance(result, BaseException):
                logging.error(f"Notification to {recipient} raised {type(result).__name__}: {result}")
                failed.append(recipient)
            elif not result:
                failed.append(recipient)

        notified = len(recipients) - len(failed)
        logging.info(f"Notification sent to {notified}/{len(recipients)} recipients")
        return NotificationResultDTO(
            success=notified > 0,
            recipients_total=len(recipients),
            recipients_notified=notified,
            failed_recipients=failed,
        )

    @staticmethod
    async def new_order(order: OrderDTO) -> NotificationResultDTO:
        message = OrderFormatterService.format_staff_notification(order)
        return await NotificationService.send_to_recipients(message)

    @staticmethod
    async def waiter_call(cart: CartDTO, now: datetime) -> NotificationResultDTO:
        message = OrderFormatterService.format_waiter_call(cart, now)
        return await NotificationService.send_to_recipients(message)
