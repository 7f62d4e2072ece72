"""
Unit Tests: PromotionRuleDTO and PromotionRepository

Tests for models/promotion.py and repositories/promotion.py covering:
- day list parsing (JSON text, Sunday-based integers, empty list)
- HH:MM time window parsing and the both-or-neither rule
- get_active() - active rows with eligible products, invalid rows skipped
"""

from datetime import time

import pytest
from pydantic import ValidationError

from enums.weekday import Weekday
from exceptions.promotion import InvalidPromotionException
from models.promotion import Promotion, PromotionItem, PromotionRuleDTO
from repositories.promotion import PromotionRepository


class TestPromotionRuleDTO:

    def test_days_from_json_text(self):
        rule = PromotionRuleDTO(id=1, name="2x1", items_required=2, weekdays="[0, 2]")

        assert rule.weekdays == frozenset({Weekday.SUNDAY, Weekday.TUESDAY})

    @pytest.mark.parametrize("value", [None, "", "null"])
    def test_missing_days_means_every_day(self, value):
        rule = PromotionRuleDTO(id=1, name="2x1", items_required=2, weekdays=value)

        assert rule.weekdays is None

    def test_empty_list_means_no_day(self):
        rule = PromotionRuleDTO(id=1, name="2x1", items_required=2, weekdays="[]")

        assert rule.weekdays == frozenset()

    @pytest.mark.parametrize("value", ["[7]", "[-1]", "lunes", '["1"]', "[true]"])
    def test_invalid_days_rejected(self, value):
        with pytest.raises(ValidationError):
            PromotionRuleDTO(id=1, name="2x1", items_required=2, weekdays=value)

    def test_time_window(self):
        rule = PromotionRuleDTO(id=1, name="Happy Hour", items_required=2, start_time="13:00", end_time="17:30")

        assert rule.start_time == time(13, 0)
        assert rule.end_time == time(17, 30)
        assert rule.has_time_window is True

    def test_single_bound_rejected(self):
        with pytest.raises(ValidationError):
            PromotionRuleDTO(id=1, name="Happy Hour", items_required=2, start_time="13:00")

    @pytest.mark.parametrize("value", ["25:00", "1300", "abc"])
    def test_invalid_time_rejected(self, value):
        with pytest.raises(ValidationError):
            PromotionRuleDTO(id=1, name="Happy Hour", items_required=2, start_time=value, end_time="17:00")

    def test_items_required_must_be_positive(self):
        with pytest.raises(ValidationError):
            PromotionRuleDTO(id=1, name="0x1", items_required=0)


class TestPromotionRepository:

    @pytest.fixture
    def promotion_rows(self):
        return [
            Promotion(
                name="2x1 Martes",
                active=True,
                items_required=2,
                items_free=1,
                applicable_days="[2]",
                items=[PromotionItem(menu_item_id=1), PromotionItem(menu_item_id=2)],
            ),
            Promotion(
                name="3x2 Tarde",
                active=True,
                items_required=3,
                items_free=1,
                start_time="13:00",
                end_time="17:00",
                items=[PromotionItem(menu_item_id=3)],
            ),
            Promotion(
                name="Inactiva",
                active=False,
                items_required=2,
                items_free=1,
                items=[PromotionItem(menu_item_id=1)],
            ),
            Promotion(
                name="Rota",
                active=True,
                items_required=2,
                items_free=1,
                applicable_days="[9]",
                items=[PromotionItem(menu_item_id=1)],
            ),
        ]

    @pytest.mark.asyncio
    async def test_get_active(self, test_session, promotion_rows):
        test_session.add_all(promotion_rows)
        await test_session.commit()

        rules = await PromotionRepository.get_active(test_session)

        assert [rule.name for rule in rules] == ["2x1 Martes", "3x2 Tarde"]
        assert rules[0].product_ids == frozenset({1, 2})
        assert rules[0].weekdays == frozenset({Weekday.TUESDAY})
        assert rules[1].start_time == time(13, 0)

    @pytest.mark.asyncio
    async def test_get_active_empty(self, test_session):
        assert await PromotionRepository.get_active(test_session) == []

    def test_to_rule_wraps_validation_errors(self):
        promotion = Promotion(id=5, name="Rota", active=True, items_required=2, items_free=1,
                              start_time="13:00", items=[])

        with pytest.raises(InvalidPromotionException) as exc_info:
            PromotionRepository.to_rule(promotion)

        assert exc_info.value.promotion_id == 5
