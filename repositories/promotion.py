import logging

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from db import session_execute
from exceptions.promotion import InvalidPromotionException
from models.promotion import Promotion, PromotionRuleDTO

logger = logging.getLogger(__name__)


class PromotionRepository:
    """Read-only access to the promotion catalog maintained by the POS admin."""

    @staticmethod
    def to_rule(promotion: Promotion) -> PromotionRuleDTO:
        """
        Convert a catalog row into a validated rule.

        Raises:
            InvalidPromotionException: If the day list, time window or bundle
                size cannot be parsed
        """
        try:
            return PromotionRuleDTO(
                id=promotion.id,
                name=promotion.name,
                active=bool(promotion.active),
                product_ids=frozenset(item.menu_item_id for item in promotion.items),
                items_required=promotion.items_required,
                items_free=promotion.items_free,
                weekdays=promotion.applicable_days,
                start_time=promotion.start_time,
                end_time=promotion.end_time,
            )
        except ValidationError as e:
            reasons = "; ".join(error["msg"] for error in e.errors())
            raise InvalidPromotionException(promotion.id, reasons) from e

    @staticmethod
    async def get_active(session: AsyncSession) -> list[PromotionRuleDTO]:
        """
        Load active promotions with their eligible products.

        Rows that fail validation are logged and skipped so one broken
        promotion never disables the others.
        """
        stmt = (
            select(Promotion)
            .where(Promotion.active == True)
            .options(selectinload(Promotion.items))
            .order_by(Promotion.id)
        )
        result = await session_execute(stmt, session)
        promotions = result.scalars().all()

        rules = []
        for promotion in promotions:
            try:
                rules.append(PromotionRepository.to_rule(promotion))
            except InvalidPromotionException as e:
                logger.warning(f"Skipping promotion: {e}")
        logger.debug(f"Loaded {len(rules)} active promotions")
        return rules
