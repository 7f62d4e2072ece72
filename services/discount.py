import logging
from datetime import datetime, time
from typing import NamedTuple

from models.cart import CartDTO
from models.discount import DiscountAllocationDTO, OrderTotalsDTO
from models.promotion import PromotionRuleDTO

logger = logging.getLogger(__name__)


class _UnitRecord(NamedTuple):
    product_id: int
    unit_price: float


class DiscountService:
    """Bundle promotion engine ("2x1", "3x2")."""

    @staticmethod
    def is_rule_valid_at(rule: PromotionRuleDTO, now: datetime) -> bool:
        """
        Check whether a promotion applies at the given instant.

        A rule is valid when:
        1. It is active
        2. now's weekday is in rule.weekdays (None means every day)
        3. now's time of day is inside [start_time, end_time] (inclusive,
           minute precision). A window whose start is later than its end
           spans midnight, e.g. 22:00-02:00.

        Args:
            rule: Promotion rule
            now: Evaluation instant, already in the store's timezone

        Returns:
            True if the rule may contribute discounts at `now`
        """
        if not rule.active:
            return False

        if rule.weekdays is not None and now.weekday() not in rule.weekdays:
            return False

        if rule.has_time_window:
            current = time(now.hour, now.minute)
            if rule.start_time <= rule.end_time:
                return rule.start_time <= current <= rule.end_time
            # start after end: the window spans midnight
            return current >= rule.start_time or current <= rule.end_time

        return True

    @staticmethod
    def compute_discounts(
        cart: CartDTO,
        rules: list[PromotionRuleDTO],
        now: datetime
    ) -> list[DiscountAllocationDTO]:
        """
        Compute free units granted by bundle promotions.

        Pure function: same cart, rules and instant always give the same
        allocations, and the cart is never modified.

        Algorithm (per currently valid rule, independently of other rules):
        1. Collect cart lines whose product is eligible for the rule
        2. Expand every line into one record per unit (qty 3 -> 3 records)
        3. bundles = eligible units // items_required; no bundle, no allocation
        4. Stable-sort the records by unit price, cheapest first
        5. Bundle i frees the record at index i * items_required, i.e. the
           cheapest unit of each bundle-sized group
        6. Sum the freed prices into one allocation for the rule

        Example with a 2x1 rule and eligible prices [10, 8, 6]:
            sorted -> [6, 8, 10], bundles = 3 // 2 = 1
            freed  -> index 0 (price 6), the unit priced 10 is left over
            allocation amount = 6

        Only one unit per bundle is freed even when items_free > 1, and a
        product eligible for several valid rules is counted by each of them.

        Args:
            cart: Cart snapshot
            rules: Promotion rules (inactive/out-of-window rules are skipped)
            now: Evaluation instant

        Returns:
            One DiscountAllocationDTO per rule that freed at least one unit,
            in the order of `rules`
        """
        allocations = []

        for rule in rules:
            if not DiscountService.is_rule_valid_at(rule, now):
                continue

            records = [
                _UnitRecord(line.product.id, line.unit_price)
                for line in cart.items
                if line.product.id in rule.product_ids
                for _ in range(line.quantity)
            ]

            bundles = len(records) // rule.items_required
            if bundles == 0:
                continue

            # sorted() is stable, ties keep cart order
            records = sorted(records, key=lambda record: record.unit_price)
            freed = [records[i * rule.items_required] for i in range(bundles)]

            amount = round(sum(record.unit_price for record in freed), 2)
            if amount <= 0:
                continue

            allocations.append(DiscountAllocationDTO(
                promotion_id=rule.id,
                promotion_name=rule.name,
                free_units=len(freed),
                amount=amount,
                freed_unit_price=freed[0].unit_price,
            ))
            logger.debug(
                f"Promotion {rule.id} ({rule.name}): {len(records)} eligible units, "
                f"{bundles} bundles, discount {amount:.2f}"
            )

        return allocations

    @staticmethod
    def compute_totals(
        subtotal: float,
        delivery_surcharge: float,
        allocations: list[DiscountAllocationDTO]
    ) -> OrderTotalsDTO:
        """
        Combine cart subtotal, delivery surcharge and discounts.

        grand_total = max(0, subtotal + delivery_surcharge - discount_total)
        """
        discount_total = round(sum((allocation.amount for allocation in allocations), 0.0), 2)
        grand_total = max(0.0, round(subtotal + delivery_surcharge - discount_total, 2))
        return OrderTotalsDTO(
            subtotal=round(subtotal, 2),
            delivery_surcharge=round(delivery_surcharge, 2),
            discount_total=discount_total,
            grand_total=grand_total,
        )
