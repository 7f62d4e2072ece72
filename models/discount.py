from pydantic import BaseModel, ConfigDict


class DiscountAllocationDTO(BaseModel):
    """Discount granted by one promotion rule for the current cart."""
    model_config = ConfigDict(frozen=True)

    promotion_id: int
    promotion_name: str
    free_units: int
    amount: float
    # price of the cheapest freed unit, shown as "2x1 (free item: $85.00)"
    freed_unit_price: float


class OrderTotalsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: float
    delivery_surcharge: float
    discount_total: float
    grand_total: float
